from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
import json
import logging

import anyio
import google.generativeai as genai
from groq import Groq
from pydantic import ValidationError

from interviewer.config import settings
from interviewer.schemas import Message
from interviewer.services.capabilities import CapabilityRegistry


logger = logging.getLogger(__name__)


class GatewayError(Exception):
	"""The model could not be reached or its answer could not be used."""


class AgentGateway:
	"""Runs one agent step: history in, newest assistant text out.

	The model may call any registered capability before answering; those
	calls are resolved locally and fed back until it produces plain text.
	"""

	def __init__(
		self,
		capabilities: CapabilityRegistry,
		*,
		provider: Optional[str] = None,
		client: Any = None,
		max_tool_rounds: Optional[int] = None,
	) -> None:
		self._capabilities = capabilities
		self._provider = (provider or settings.llm_provider or "gemini").lower()
		self._client = client
		self._max_tool_rounds = settings.max_tool_rounds if max_tool_rounds is None else max_tool_rounds

	@property
	def provider(self) -> str:
		return self._provider

	def _ensure_client(self):
		if self._client is not None:
			return self._client
		if self._provider == "groq":
			api_key = settings.groq_api_key
			if not api_key:
				return None
			self._client = Groq(api_key=api_key)
			return self._client
		elif self._provider == "gemini":
			api_key = settings.gemini_api_key
			if not api_key:
				return None
			# For gemini we keep a configured module handle, same as the SDK examples
			genai.configure(api_key=api_key)
			self._client = genai
			return self._client
		else:
			return None

	@property
	def enabled(self) -> bool:
		if self._client is not None:
			return True
		if self._provider == "groq":
			return bool(settings.groq_api_key)
		if self._provider == "gemini":
			return bool(settings.gemini_api_key)
		return False

	async def invoke(self, messages: Sequence[Message]) -> Optional[str]:
		if self._provider not in ("groq", "gemini"):
			raise GatewayError(f"Unsupported LLM provider: {self._provider}")
		client = self._ensure_client()
		if client is None:
			raise GatewayError(f"No API key configured for provider '{self._provider}'")

		history = list(messages)

		def _call() -> Optional[str]:
			if self._provider == "groq":
				return self._run_groq(client, history)
			return self._run_gemini(client, history)

		try:
			text = await anyio.to_thread.run_sync(_call)
		except GatewayError:
			raise
		except Exception as e:
			raise GatewayError(f"{self._provider} request failed: {e}") from e
		text = (text or "").strip()
		return text or None

	def _run_capability(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
		try:
			capability = self._capabilities.get(name)
		except KeyError as e:
			raise GatewayError(f"Model requested {e.args[0]}") from e
		try:
			result = capability.invoke(arguments)
		except ValidationError as e:
			# Hand the error back so the model can retry with proper arguments
			logger.info("Capability %s rejected arguments (%d errors)", name, e.error_count())
			return {
				"error": f"invalid arguments for {name}",
				"details": json.loads(e.json(include_url=False)),
			}
		logger.debug("Capability %s -> %s", name, result)
		return result

	def _groq_tools(self) -> List[Dict[str, Any]]:
		return [
			{
				"type": "function",
				"function": {
					"name": cap.name,
					"description": cap.description,
					"parameters": cap.json_schema(),
				},
			}
			for cap in self._capabilities
		]

	def _run_groq(self, client, history: List[Message]) -> Optional[str]:
		messages: List[Dict[str, Any]] = [{"role": m.role, "content": m.content} for m in history]
		tools = self._groq_tools()
		for round_no in range(self._max_tool_rounds + 1):
			kwargs: Dict[str, Any] = {
				"model": settings.groq_model,
				"messages": messages,
				"temperature": settings.answer_temperature,
			}
			if tools:
				kwargs["tools"] = tools
				kwargs["tool_choice"] = "auto"
			resp = client.chat.completions.create(**kwargs)
			if not resp.choices:
				raise GatewayError("groq returned no choices")
			reply = resp.choices[0].message
			tool_calls = reply.tool_calls or []
			if not tool_calls:
				return reply.content
			if round_no == self._max_tool_rounds:
				break

			messages.append({
				"role": "assistant",
				"content": reply.content or "",
				"tool_calls": [
					{
						"id": call.id,
						"type": "function",
						"function": {"name": call.function.name, "arguments": call.function.arguments},
					}
					for call in tool_calls
				],
			})
			for call in tool_calls:
				try:
					arguments = json.loads(call.function.arguments or "{}")
				except json.JSONDecodeError:
					result: Dict[str, Any] = {"error": "arguments were not valid JSON"}
				else:
					result = self._run_capability(call.function.name, arguments)
				messages.append({
					"role": "tool",
					"tool_call_id": call.id,
					"name": call.function.name,
					"content": json.dumps(result),
				})
		raise GatewayError(f"Model kept calling tools after {self._max_tool_rounds} rounds")

	def _gemini_tools(self) -> List[Dict[str, Any]]:
		declarations = [
			{"name": cap.name, "description": cap.description, "parameters": cap.json_schema()}
			for cap in self._capabilities
		]
		return [{"function_declarations": declarations}] if declarations else []

	def _run_gemini(self, client, history: List[Message]) -> Optional[str]:
		system_text = "\n\n".join(m.content for m in history if m.role == "system")
		contents = [
			genai.protos.Content(
				role="model" if m.role == "assistant" else "user",
				parts=[genai.protos.Part(text=m.content)],
			)
			for m in history
			if m.role != "system"
		]
		gmodel = client.GenerativeModel(
			settings.gemini_model,
			system_instruction=system_text or None,
			tools=self._gemini_tools() or None,
		)
		for round_no in range(self._max_tool_rounds + 1):
			resp = gmodel.generate_content(
				contents,
				generation_config={"temperature": settings.answer_temperature},
			)
			if not getattr(resp, "candidates", None):
				raise GatewayError("gemini returned no candidates")
			content = resp.candidates[0].content
			parts = list(content.parts)
			calls = [p.function_call for p in parts if p.function_call and p.function_call.name]
			if not calls:
				return "".join(p.text for p in parts if p.text)
			if round_no == self._max_tool_rounds:
				break

			contents.append(content)
			responses = []
			for call in calls:
				result = self._run_capability(call.name, dict(call.args))
				responses.append(genai.protos.Part(
					function_response=genai.protos.FunctionResponse(name=call.name, response=result),
				))
			contents.append(genai.protos.Content(role="user", parts=responses))
		raise GatewayError(f"Model kept calling tools after {self._max_tool_rounds} rounds")
