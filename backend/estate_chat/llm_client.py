# backend/estate_chat/llm_client.py
import json
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import openai
from loguru import logger
from openai import OpenAI

from .config import OPENAI_API_KEY, OPENAI_MODEL
from .exceptions import ExternalServiceFailure
from .schemas import Property

FILTER_PROPERTIES_FUNCTION = {
    "name": "filterProperties",
    "description": "Filter hardcoded properties by location and maximum price.",
    "parameters": {
        "type": "object",
        "properties": {
            "location": {
                "type": "string",
                "description": "The city where the property is located.",
            },
            "maxPrice": {
                "type": "integer",
                "description": "Maximum budget in INR.",
            },
        },
        "required": ["location", "maxPrice"],
    },
}

SYSTEM_PROMPT = (
    "You are a helpful real estate assistant. If the query asks for properties filtered "
    "by location and max price, use the function filterProperties. Otherwise, answer as usual."
)

RENDER_PROMPT = "Format these properties as a nice, readable answer for the user."


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: str  # raw JSON text as emitted by the model


@dataclass(frozen=True)
class ModelDecision:
    """Outcome of the first model call: a function call or a free-text answer."""

    function_call: Optional[FunctionCall] = None
    text: Optional[str] = None


class PropertyAssistantLLM:
    """Thin wrapper around the OpenAI chat API for the interpret-then-render protocol."""

    def __init__(self, client: Optional[OpenAI] = None,
                 api_key: str = OPENAI_API_KEY,
                 model: str = OPENAI_MODEL):
        self._client = client
        self.api_key = api_key
        self.model = model

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            try:
                # Failed calls are reported, never retried.
                self._client = OpenAI(api_key=self.api_key or None, max_retries=0)
            except openai.OpenAIError as e:
                raise ExternalServiceFailure(str(e)) from e
        return self._client

    def _create(self, **kwargs) -> Any:
        try:
            return self.client.chat.completions.create(model=self.model, **kwargs)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI Error: {e}")
            raise ExternalServiceFailure(str(e)) from e

    @staticmethod
    def _first_message(completion: Any):
        try:
            choice = completion.choices[0]
            return choice, choice.message
        except (AttributeError, IndexError, TypeError) as e:
            raise ExternalServiceFailure(f"Malformed completion response: {e!r}") from e

    def interpret(self, query: str) -> ModelDecision:
        completion = self._create(
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": query},
            ],
            functions=[FILTER_PROPERTIES_FUNCTION],
            function_call="auto",
        )
        choice, message = self._first_message(completion)
        func_call = getattr(message, "function_call", None)

        if func_call is not None:
            return ModelDecision(function_call=FunctionCall(
                name=func_call.name,
                arguments=func_call.arguments or "{}",
            ))
        if getattr(choice, "finish_reason", None) == "function_call":
            raise ExternalServiceFailure("Model finished with function_call but sent no call")

        return ModelDecision(text=getattr(message, "content", None) or "")

    def render(self, query: str, function_name: str, properties: Sequence[Property]) -> str:
        completion = self._create(
            messages=[
                {"role": "system", "content": RENDER_PROMPT},
                {"role": "user", "content": query},
                {
                    "role": "function",
                    "name": function_name,
                    "content": json.dumps([p.model_dump() for p in properties]),
                },
            ],
        )
        _, message = self._first_message(completion)
        content = getattr(message, "content", None)
        if content is None:
            raise ExternalServiceFailure("Model returned no content for the property rendering")
        return content
