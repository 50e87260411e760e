from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from assistant_relay.api.routes import internal_error, message_required, router
from assistant_relay.config import Settings, logger, settings as default_settings
from assistant_relay.integration.assistants import AssistantsClient
from assistant_relay.services.relay import AssistantRelay, fallback_text, internal_error_text


def build_relay(cfg: Settings) -> AssistantRelay:
    client = AssistantsClient(
        api_key=cfg.openai_api_key,
        base_url=cfg.openai_base_url,
        timeout=cfg.http_timeout,
    )
    return AssistantRelay(
        client=client,
        assistant_id=cfg.openai_assistant_id,
        fallback_response=fallback_text(cfg.support_email),
        poll_interval=cfg.poll_interval_s,
        max_attempts=cfg.poll_max_attempts,
    )


def create_app(cfg: Optional[Settings] = None, relay: Optional[AssistantRelay] = None) -> FastAPI:
    cfg = cfg or default_settings
    app = FastAPI(title="Assistant Relay", version=cfg.__version__)
    app.state.relay = relay or build_relay(cfg)
    app.state.internal_error_response = internal_error_text(cfg.support_email)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(err.get("type") == "json_invalid" for err in errors):
            logger.warning(f"{request.url.path}: body is not valid JSON")
            return internal_error(request)
        logger.info(f"{request.url.path}: rejected body ({len(errors)} validation errors)")
        return message_required()

    app.include_router(router)
    logger.info(
        f"Assistant relay initialized: assistant_configured={bool(cfg.openai_assistant_id)} "
        f"key_set={bool(cfg.openai_api_key)}"
    )
    return app


app = create_app()
