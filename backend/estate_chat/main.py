# backend/estate_chat/main.py
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .catalog import get_properties
from .chat import ChatOrchestrator
from .chat_log import ChatLog
from .config import CHAT_LOG_PATH, CORS_ORIGINS, MOCK_OPENAI
from .schemas import ChatRequest, ChatResponse, ErrorResponse, Property

app = FastAPI(title="Estate Chat API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_orchestrator() -> ChatOrchestrator:
    logger.info(f"Chat mode: {'local heuristics' if MOCK_OPENAI else 'OpenAI function calling'}")
    return ChatOrchestrator(use_local=MOCK_OPENAI)


@lru_cache(maxsize=1)
def get_chat_log() -> ChatLog:
    return ChatLog(CHAT_LOG_PATH)


# -----------------------------
# PROPERTIES
# -----------------------------
@app.get("/api/properties", response_model=List[Property])
def list_properties():
    return get_properties()


# -----------------------------
# CHAT
# -----------------------------
@app.post(
    "/api/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def chat_endpoint(request: ChatRequest,
                  orchestrator: ChatOrchestrator = Depends(get_orchestrator),
                  chat_log: ChatLog = Depends(get_chat_log)):
    query = request.message or ""
    logger.info(f"Received chat request: message='{query}'")

    result = orchestrator.handle(query)
    chat_log.append(result.to_exchange())

    if not result.ok:
        logger.error(f"Chat request failed ({result.state.value}): {result.error}")
        return JSONResponse(
            status_code=result.status_code,
            content={"error": result.error.public_message},
        )

    return ChatResponse(response=result.reply, properties=result.properties)
