from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
	model_config = ConfigDict(frozen=True)

	role: Role
	content: str


class AskIn(BaseModel):
	message: Optional[str] = Field(default=None, description="Candidate's answer or question; omitted to start")


class AskOut(BaseModel):
	reply: str
	history: List[Message]


class ErrorOut(BaseModel):
	reply: str


class FeedbackOut(BaseModel):
	"""Interview transcript without the system instructions."""
	history: List[Message]


class ResetOut(BaseModel):
	message: str


class IntroIn(BaseModel):
	"""Arguments the model must send when calling analyze_intro."""
	model_config = ConfigDict(extra="forbid", strict=True)

	intro: str = Field(..., description="The candidate's self-introduction")


class IntroSignals(BaseModel):
	project: bool
	skill: bool
	achievement: bool
	internship: bool
	work: bool
