from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from assistant_relay.api.schemas import ChatRequest, ErrorResponse, HealthResponse, RelayResponse
from assistant_relay.config import logger
from assistant_relay.services.relay import AssistantRelay

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

router = APIRouter()


def get_relay(request: Request) -> AssistantRelay:
    return request.app.state.relay


def message_required() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Message is required").model_dump(exclude_none=True),
    )


def internal_error(request: Request) -> JSONResponse:
    body = ErrorResponse(error="Internal server error", response=request.app.state.internal_error_response)
    return JSONResponse(
        status_code=500,
        content=body.model_dump(),
        headers={"Access-Control-Allow-Origin": "*"},
    )


@router.get("/health", response_model=HealthResponse)
def healthcheck():
    logger.debug("Healthcheck called")
    return HealthResponse()


@router.post("/chat", response_model=RelayResponse, response_model_exclude_none=True)
async def chat(request: Request, req: ChatRequest, relay: AssistantRelay = Depends(get_relay)):
    logger.info(f"/chat called: message_len={len(req.message or '')}")
    if not req.message:
        return message_required()
    try:
        result = await relay.relay(req.message)
    except Exception:
        logger.exception("/chat unexpected error")
        return internal_error(request)
    logger.debug(f"/chat result: error={result.error}")
    body = RelayResponse(response=result.response, error=result.error)
    return JSONResponse(content=body.model_dump(exclude_none=True), headers=CORS_HEADERS)


@router.options("/chat")
def chat_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)
