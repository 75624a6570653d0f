from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator
from typing import List, Optional
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


# System message plus one user/assistant exchange
MIN_HISTORY_MESSAGES = 3


INTERVIEWER_PROMPT = (
	"You are an interviewer. Ask natural, context-aware follow-up questions. "
	"Avoid repeating yourself. Keep tone professional and concise."
)


class Settings(BaseSettings):
	# Server
	host: str = "0.0.0.0"
	port: int = 3000
	cors_allow_origins: List[str] = ["*"]
	static_dir: str = "public"  # frontend bundle, mounted only if present

	# LLM Provider Selection
	llm_provider: str = "gemini"  # options: gemini, groq

	# Google Gemini
	gemini_api_key: Optional[str] = Field(
		default=None,
		validation_alias=AliasChoices("gemini_api_key", "google_api_key"),
	)
	gemini_model: str = "gemini-2.5-flash"

	# Groq
	groq_api_key: Optional[str] = None
	groq_model: str = "llama-3.3-70b-versatile"
	answer_temperature: float = 0.4

	# Agent
	system_prompt: str = INTERVIEWER_PROMPT
	max_tool_rounds: int = 5
	max_history_messages: Optional[int] = None  # None keeps the full transcript

	# Logging
	log_level: str = "INFO"
	analytics_path: Optional[str] = None  # e.g., logs/turns.jsonl

	@field_validator("answer_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(1.0, v))

	@field_validator("max_history_messages")
	@classmethod
	def check_history_cap(cls, v: Optional[int]) -> Optional[int]:
		if v is not None and v < MIN_HISTORY_MESSAGES:
			raise ValueError(f"max_history_messages must be at least {MIN_HISTORY_MESSAGES}")
		return v

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",")]
		return v

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
