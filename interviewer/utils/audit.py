from __future__ import annotations

import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import asyncio


logger = logging.getLogger(__name__)


class JsonlAuditor:
	"""Appends one JSON line per interview event. Disabled without a path.

	Write failures are logged and dropped; they never fail the request.
	"""

	def __init__(self, path: Optional[str] = None) -> None:
		self._path = Path(path) if path else None
		self._lock = asyncio.Lock()

	def configure(self, path: Optional[str]) -> None:
		self._path = Path(path) if path else None

	@property
	def enabled(self) -> bool:
		return self._path is not None

	async def log(self, event: str, **fields: Any) -> None:
		if not self._path:
			return
		record: Dict[str, Any] = {"ts": datetime.now(timezone.utc).isoformat(), "type": event, **fields}
		line = json.dumps(record, ensure_ascii=False, default=str)
		async with self._lock:
			try:
				self._path.parent.mkdir(parents=True, exist_ok=True)
				with self._path.open("a", encoding="utf-8") as f:
					f.write(line + "\n")
			except OSError:
				logger.exception("Could not write %s event to audit log %s", event, self._path)


auditor = JsonlAuditor()
