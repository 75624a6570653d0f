from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from typing import Optional

from interviewer.schemas import AskIn, AskOut, ErrorOut, FeedbackOut, ResetOut
from interviewer.services.agent_gateway import GatewayError
from interviewer.services.interview_service import InterviewService, get_interview_service


router = APIRouter()

ERROR_REPLY = "Error processing your request."


@router.post("/ask", response_model=AskOut, responses={500: {"model": ErrorOut}})
async def ask(
	payload: Optional[AskIn] = Body(default=None),
	service: InterviewService = Depends(get_interview_service),
):
	message = payload.message if payload else None
	try:
		result = await service.handle_turn(message)
	except GatewayError:
		# Already logged with traceback by the service
		return JSONResponse(status_code=500, content=ErrorOut(reply=ERROR_REPLY).model_dump())
	return AskOut(reply=result.reply, history=list(result.history))


@router.get("/feedback", response_model=FeedbackOut)
async def feedback(service: InterviewService = Depends(get_interview_service)):
	# Return all Q&A in order, system instructions excluded
	return FeedbackOut(history=list(service.feedback()))


@router.post("/reset", response_model=ResetOut)
async def reset(service: InterviewService = Depends(get_interview_service)):
	await service.reset()
	return ResetOut(message="Interview reset successfully.")
