from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class Capability:
	"""A named function the model may call while it reasons.

	Arguments are validated against ``input_model`` before ``handler`` runs,
	so a malformed call raises ``pydantic.ValidationError`` and the handler
	never sees it.
	"""
	name: str
	description: str
	input_model: Type[BaseModel]
	handler: Callable[..., BaseModel]

	def json_schema(self) -> Dict[str, Any]:
		# Only the subset both providers accept: no titles, no additionalProperties
		full = self.input_model.model_json_schema()
		properties = {
			name: {k: v for k, v in prop.items() if k in ("type", "description", "enum", "items")}
			for name, prop in full.get("properties", {}).items()
		}
		return {
			"type": "object",
			"properties": properties,
			"required": list(full.get("required", [])),
		}

	def invoke(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
		validated = self.input_model.model_validate(arguments)
		result = self.handler(**validated.model_dump())
		return result.model_dump()


class CapabilityRegistry:
	def __init__(self, capabilities: List[Capability] | None = None) -> None:
		self._by_name: Dict[str, Capability] = {}
		for cap in capabilities or []:
			self.register(cap)

	def register(self, capability: Capability) -> None:
		if capability.name in self._by_name:
			raise ValueError(f"capability already registered: {capability.name}")
		self._by_name[capability.name] = capability

	def get(self, name: str) -> Capability:
		try:
			return self._by_name[name]
		except KeyError:
			raise KeyError(f"unknown capability: {name}") from None

	def __iter__(self) -> Iterator[Capability]:
		return iter(self._by_name.values())

	def __len__(self) -> int:
		return len(self._by_name)
