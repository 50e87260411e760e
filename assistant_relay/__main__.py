import uvicorn

from assistant_relay.config import settings

host = settings.host
port = settings.port
reload_opt = settings.reload

if __name__ == "__main__":
    # ``python -m assistant_relay`` serves the FastAPI app from ``assistant_relay.api``
    uvicorn.run("assistant_relay.api:app", host=host, port=port, reload=reload_opt)
