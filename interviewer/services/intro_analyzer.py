from __future__ import annotations

from interviewer.schemas import IntroIn, IntroSignals
from interviewer.services.capabilities import Capability


def analyze_intro(intro: str) -> IntroSignals:
	"""Flag which topics a self-introduction touches on."""
	lower = intro.lower()
	return IntroSignals(
		project="project" in lower,
		skill="skill" in lower,
		achievement="achieve" in lower,
		internship="intern" in lower,
		work="experience" in lower or "job" in lower,
	)


analyze_intro_capability = Capability(
	name="analyze_intro",
	description="Analyze intro for keywords",
	input_model=IntroIn,
	handler=analyze_intro,
)
