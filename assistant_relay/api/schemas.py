from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="User message to relay")
    # accepted for compatibility; the configured assistant is always used
    assistant_id: Optional[str] = Field(None, alias="assistantId")


class RelayResponse(BaseModel):
    response: str
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    response: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
