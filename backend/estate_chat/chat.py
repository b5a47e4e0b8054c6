# backend/estate_chat/chat.py
"""
Chat orchestration.

A request is answered either locally (regex interpretation of the message) or by
the external model through the filterProperties function-call protocol:

    RECEIVED -> DISPATCHED -> FUNCTION_CALL_REQUESTED -> ARGS_PARSED -> FILTERED
             -> RENDER_DISPATCHED -> RENDERED -> REPLIED
    RECEIVED -> DISPATCHED -> FREE_TEXT_RETURNED -> REPLIED

Bad function arguments end in CLIENT_ERROR, model/transport failures in
SERVER_ERROR. Nothing is retried.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from .catalog import PROPERTIES, known_locations
from .config import DEFAULT_LOCATION, DEFAULT_MAX_PRICE, MOCK_OPENAI
from .exceptions import ChatError, ExternalServiceFailure, MalformedFunctionArguments
from .llm_client import FILTER_PROPERTIES_FUNCTION, ModelDecision, PropertyAssistantLLM
from .property_search import filter_properties, handle_property_query
from .schemas import ChatExchange, FilterRequest, FunctionCallRecord, Property

FILTER_FUNCTION_NAME = FILTER_PROPERTIES_FUNCTION["name"]


class ChatState(str, Enum):
    RECEIVED = "received"
    DISPATCHED = "dispatched"
    FUNCTION_CALL_REQUESTED = "function_call_requested"
    ARGS_PARSED = "args_parsed"
    FILTERED = "filtered"
    RENDER_DISPATCHED = "render_dispatched"
    RENDERED = "rendered"
    FREE_TEXT_RETURNED = "free_text_returned"
    REPLIED = "replied"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


TERMINAL_STATES = frozenset({ChatState.REPLIED, ChatState.CLIENT_ERROR, ChatState.SERVER_ERROR})


@dataclass
class ChatResult:
    query: str
    state: ChatState = ChatState.RECEIVED
    reply: str = ""
    properties: Optional[List[Property]] = None
    function_call: Optional[FunctionCallRecord] = None
    error: Optional[ChatError] = None
    trace: List[ChatState] = field(default_factory=list)

    # Working data for the external-model path
    decision: Optional[ModelDecision] = None
    filters: Optional[FilterRequest] = None

    @property
    def ok(self) -> bool:
        return self.state is ChatState.REPLIED

    @property
    def status_code(self) -> int:
        if self.ok or self.error is None:
            return 200
        return self.error.status_code

    def to_exchange(self) -> ChatExchange:
        if self.error is not None:
            return ChatExchange(
                user_query=self.query,
                ai_response=f"ERROR: {self.error}",
                function_call=self.function_call,
                error=f"{type(self.error).__name__}: {self.error}",
            )
        return ChatExchange(
            user_query=self.query,
            ai_response=self.reply,
            function_call=self.function_call,
        )


def parse_function_arguments(raw: Optional[str]) -> FilterRequest:
    """Parse model-emitted filterProperties arguments; anything unusable is malformed."""
    try:
        args = json.loads(raw or "{}")
    except (TypeError, ValueError) as e:
        raise MalformedFunctionArguments(f"Arguments are not valid JSON: {e}") from e

    if not isinstance(args, dict):
        raise MalformedFunctionArguments(f"Arguments must be a JSON object, got {type(args).__name__}")

    try:
        return FilterRequest.model_validate(args)
    except ValidationError as e:
        raise MalformedFunctionArguments(str(e)) from e


class ChatOrchestrator:
    def __init__(self,
                 use_local: bool = MOCK_OPENAI,
                 llm: Optional[PropertyAssistantLLM] = None,
                 properties: Sequence[Property] = PROPERTIES,
                 default_location: str = DEFAULT_LOCATION,
                 default_max_price: int = DEFAULT_MAX_PRICE):
        if default_max_price < 0:
            raise ValueError(f"default_max_price must be non-negative, got {default_max_price}")

        self.use_local = use_local
        self.llm = llm or PropertyAssistantLLM()
        self.properties = tuple(properties)
        self.known_locations = known_locations(self.properties)
        self.default_location = default_location
        self.default_max_price = default_max_price

        if default_location not in self.known_locations:
            logger.warning(f"Default location '{default_location}' is not in the catalog")

        self._handlers: Dict[ChatState, Callable[[ChatResult], ChatState]] = {
            ChatState.RECEIVED: lambda r: ChatState.DISPATCHED,
            ChatState.DISPATCHED: self._dispatch,
            ChatState.FUNCTION_CALL_REQUESTED: self._parse_args,
            ChatState.ARGS_PARSED: self._filter,
            ChatState.FILTERED: lambda r: ChatState.RENDER_DISPATCHED,
            ChatState.RENDER_DISPATCHED: self._render,
            ChatState.RENDERED: lambda r: ChatState.REPLIED,
            ChatState.FREE_TEXT_RETURNED: self._free_text,
        }

    def handle(self, query: str) -> ChatResult:
        if not isinstance(query, str):
            query = ""
        if self.use_local:
            return self._handle_local(query)
        return self._handle_external(query)

    # -----------------------------
    # LOCAL HEURISTICS
    # -----------------------------
    def _handle_local(self, query: str) -> ChatResult:
        answer = handle_property_query(
            query,
            properties=self.properties,
            known_locations=self.known_locations,
            default_location=self.default_location,
            default_max_price=self.default_max_price,
        )
        return ChatResult(
            query=query,
            state=ChatState.REPLIED,
            reply=answer.reply,
            properties=answer.properties,
            function_call=FunctionCallRecord(name=FILTER_FUNCTION_NAME, args=answer.filters.as_args()),
            trace=[ChatState.RECEIVED, ChatState.REPLIED],
        )

    # -----------------------------
    # EXTERNAL MODEL
    # -----------------------------
    def _handle_external(self, query: str) -> ChatResult:
        result = ChatResult(query=query)
        result.trace.append(result.state)

        while result.state not in TERMINAL_STATES:
            try:
                next_state = self._handlers[result.state](result)
            except MalformedFunctionArguments as e:
                logger.warning(f"Rejected function arguments: {e}")
                result.error = e
                next_state = ChatState.CLIENT_ERROR
            except ChatError as e:
                result.error = e
                next_state = ChatState.SERVER_ERROR
            except Exception as e:
                logger.exception(f"Unexpected failure in state {result.state.value}")
                result.error = ExternalServiceFailure(str(e))
                next_state = ChatState.SERVER_ERROR

            logger.debug(f"{result.state.value} -> {next_state.value}")
            result.state = next_state
            result.trace.append(next_state)

        return result

    def _dispatch(self, result: ChatResult) -> ChatState:
        result.decision = self.llm.interpret(result.query)
        if result.decision.function_call is not None:
            return ChatState.FUNCTION_CALL_REQUESTED
        return ChatState.FREE_TEXT_RETURNED

    def _parse_args(self, result: ChatResult) -> ChatState:
        call = result.decision.function_call
        if call.name != FILTER_FUNCTION_NAME:
            raise MalformedFunctionArguments(f"Unknown function '{call.name}'")

        result.filters = parse_function_arguments(call.arguments)
        result.function_call = FunctionCallRecord(name=call.name, args=result.filters.as_args())
        return ChatState.ARGS_PARSED

    def _filter(self, result: ChatResult) -> ChatState:
        result.properties = filter_properties(
            result.filters.location, result.filters.max_price, self.properties
        )
        return ChatState.FILTERED

    def _render(self, result: ChatResult) -> ChatState:
        result.reply = self.llm.render(result.query, result.function_call.name, result.properties)
        return ChatState.RENDERED

    def _free_text(self, result: ChatResult) -> ChatState:
        result.reply = result.decision.text or ""
        return ChatState.REPLIED
