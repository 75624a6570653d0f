from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.responses import JSONResponse

from interviewer.config import settings
from interviewer.utils.logging import configure_logging
from interviewer.utils.audit import auditor
from interviewer.routers.interview import router as interview_router
from interviewer.services.interview_service import interview_service


configure_logging(settings.log_level)
auditor.configure(settings.analytics_path)
app = FastAPI(title="Interview Simulator", version="0.1.0")

# CORS
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	# Wildcard origins require credentials to be False per CORS spec
	allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
	allow_methods=["*"],
	allow_headers=["*"],
	max_age=3600,
)


@app.get("/health")
async def health() -> JSONResponse:
	gateway = interview_service.gateway
	return JSONResponse({
		"status": "ok",
		"version": app.version,
		"llm": {"provider": gateway.provider, "enabled": gateway.enabled}
	})


# Routers
app.include_router(interview_router, tags=["interview"])

# Frontend bundle; mounted last so API routes win
if Path(settings.static_dir).is_dir():
	app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def run() -> None:
	import uvicorn

	uvicorn.run("interviewer.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
	run()
