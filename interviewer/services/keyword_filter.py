from __future__ import annotations


UNRELATED_KEYWORDS = (
	"chat",
	"game",
	"fun",
	"something else",
	"not interview",
	"joke",
	"random",
)


def is_unrelated(text: str) -> bool:
	"""True when the text looks like an attempt to steer away from the interview.

	Plain substring match on the lowercased text, so "fundamentals" counts
	as a hit for "fun".
	"""
	lowered = (text or "").lower()
	return any(k in lowered for k in UNRELATED_KEYWORDS)
