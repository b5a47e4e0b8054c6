# backend/estate_chat/schemas.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    size: str
    price: int = Field(ge=0)
    location: str


class FilterRequest(BaseModel):
    """Structured filter built from a user message or from model-emitted arguments."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: str
    max_price: int = Field(ge=0, alias="maxPrice", strict=True)

    def as_args(self) -> Dict[str, Any]:
        return {"location": self.location, "maxPrice": self.max_price}


class ChatRequest(BaseModel):
    message: Optional[str] = ""


class ChatResponse(BaseModel):
    response: str
    properties: Optional[List[Property]] = None


class ErrorResponse(BaseModel):
    error: str


class FunctionCallRecord(BaseModel):
    name: str
    args: Dict[str, Any] = {}


class ChatExchange(BaseModel):
    """One line of the exchange log."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_query: str = Field(default="", alias="userQuery")
    ai_response: str = Field(default="", alias="aiResponse")
    function_call: Optional[FunctionCallRecord] = None
    error: Optional[str] = None

    def to_log_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        if data.get("error") is None:
            data.pop("error", None)
        return data
