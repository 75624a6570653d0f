from __future__ import annotations

from typing import List, Optional, Tuple

from interviewer.config import MIN_HISTORY_MESSAGES
from interviewer.schemas import Message


class ConversationStore:
	"""Ordered interview transcript that always opens with the system prompt.

	Readers get tuples of frozen messages, never the list itself.
	"""

	def __init__(self, system_prompt: str, max_messages: Optional[int] = None) -> None:
		if max_messages is not None and max_messages < MIN_HISTORY_MESSAGES:
			raise ValueError(f"max_messages must be at least {MIN_HISTORY_MESSAGES}")
		self._system_prompt = system_prompt
		self._max_messages = max_messages
		self._messages: List[Message] = self._initial()

	def _initial(self) -> List[Message]:
		return [Message(role="system", content=self._system_prompt)]

	def append(self, message: Message) -> None:
		self._messages.append(message)
		if self._max_messages is not None:
			# Drop the oldest exchanges but keep the system message in front
			overflow = len(self._messages) - self._max_messages
			if overflow > 0:
				del self._messages[1:1 + overflow]
				# The transcript after the system message must open with a user turn
				while len(self._messages) > 1 and self._messages[1].role == "assistant":
					del self._messages[1]

	def reset(self) -> None:
		self._messages = self._initial()

	def snapshot(self) -> Tuple[Message, ...]:
		return tuple(self._messages)

	def snapshot_visible(self) -> Tuple[Message, ...]:
		return tuple(m for m in self._messages if m.role != "system")

	def __len__(self) -> int:
		return len(self._messages)
