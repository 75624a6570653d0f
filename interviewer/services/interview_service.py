from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import asyncio
import logging

from interviewer.config import settings
from interviewer.schemas import Message
from interviewer.services.agent_gateway import AgentGateway, GatewayError
from interviewer.services.capabilities import CapabilityRegistry
from interviewer.services.conversation_store import ConversationStore
from interviewer.services.intro_analyzer import analyze_intro_capability
from interviewer.services.keyword_filter import is_unrelated
from interviewer.utils.audit import JsonlAuditor, auditor


logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Let's start the interview."
# Byte-for-byte as clients expect it, typos included
CANNED_REPLY = "Hi Shrikant are ypu redy to ypu interview"
FALLBACK_REPLY = "Can you elaborate?"


@dataclass(frozen=True)
class TurnResult:
	reply: str
	history: Tuple[Message, ...]
	short_circuited: bool = False


class InterviewService:
	"""Owns one interview transcript and drives turns through the agent.

	Turns and resets run one at a time, so a reply always lands right after
	the message that produced it.
	"""

	def __init__(self, store: ConversationStore, gateway: AgentGateway, audit: Optional[JsonlAuditor] = None) -> None:
		self._store = store
		self._gateway = gateway
		self._auditor = audit or JsonlAuditor()
		self._lock = asyncio.Lock()

	@property
	def gateway(self) -> AgentGateway:
		return self._gateway

	async def handle_turn(self, user_message: Optional[str]) -> TurnResult:
		# Unreachable while blank input short-circuits below; kept for when it stops doing so
		prompt = user_message or DEFAULT_PROMPT

		if not user_message or is_unrelated(user_message):
			logger.info("Short-circuiting turn (blank=%s)", not user_message)
			await self._auditor.log("short_circuit", message=user_message)
			return TurnResult(reply=CANNED_REPLY, history=self._store.snapshot(), short_circuited=True)

		async with self._lock:
			self._store.append(Message(role="user", content=prompt))
			try:
				content = await self._gateway.invoke(self._store.snapshot())
			except Exception as e:
				logger.exception("Agent call failed; transcript keeps the unanswered message")
				await self._auditor.log("turn_failed", message=prompt, error=type(e).__name__)
				if isinstance(e, GatewayError):
					raise
				raise GatewayError(str(e)) from e

			reply = content or FALLBACK_REPLY
			self._store.append(Message(role="assistant", content=reply))
			history = self._store.snapshot()

		await self._auditor.log("turn", message=prompt, reply=reply)
		return TurnResult(reply=reply, history=history)

	async def reset(self) -> None:
		async with self._lock:
			self._store.reset()
		logger.info("Interview transcript reset")
		await self._auditor.log("reset")

	def feedback(self) -> Tuple[Message, ...]:
		return self._store.snapshot_visible()


def build_interview_service() -> InterviewService:
	store = ConversationStore(settings.system_prompt, max_messages=settings.max_history_messages)
	gateway = AgentGateway(CapabilityRegistry([analyze_intro_capability]))
	return InterviewService(store, gateway, audit=auditor)


interview_service = build_interview_service()


def get_interview_service() -> InterviewService:
	return interview_service
