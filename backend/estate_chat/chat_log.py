# backend/estate_chat/chat_log.py
import json
import os
import threading
from typing import Any, Dict, List

from loguru import logger

from .config import CHAT_LOG_PATH
from .schemas import ChatExchange


class ChatLog:
    """Append-only JSON Lines log, one object per chat exchange."""

    def __init__(self, path: str = CHAT_LOG_PATH):
        self.path = path
        self._lock = threading.Lock()

    def append(self, exchange: ChatExchange) -> None:
        line = json.dumps(exchange.to_log_dict(), ensure_ascii=False) + "\n"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with self._lock, open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            logger.error(f"Logging failed: {e}")

    def read_all(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
