"""Keeps a history of past interactions in a local SQLite database."""

import json
import logging
import os
import sqlite3
import uuid

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from .files import user_config_dir

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    conversation_id TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

# Never written to the history.
_SECRET_KEYS = ("apiKey",)


def default_database_path() -> str:
    return os.path.join(user_config_dir(), "db", "default.sqlite")


class Brain:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or default_database_path()
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        with self._connection() as conn:
            conn.execute(_SCHEMA)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def save_interaction(
        self,
        ai_reply: str,
        config: Dict,
        input_data: str,
        pre_prompt: str = "",
        prompt: str = "",
    ) -> str:
        """Stores one interaction under a new conversation id and returns that id."""
        conversation_id = str(uuid.uuid4())
        content = {
            "aiReply": ai_reply,
            "configData": {k: v for k, v in config.items() if k not in _SECRET_KEYS},
            "inputData": input_data,
        }
        if pre_prompt:
            content["prePrompt"] = pre_prompt
        if prompt:
            content["prompt"] = prompt

        self.add_message(conversation_id, content)
        logger.debug("Interaction saved as conversation %s", conversation_id)
        return conversation_id

    def add_message(self, conversation_id: str, content: Dict):
        created_at = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO messages (conversation_id, content, created_at) VALUES (?, ?, ?)",
                (conversation_id, json.dumps(content, default=str), created_at),
            )

    def messages(self, conversation_id: str) -> List[Dict]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT content FROM messages WHERE conversation_id = ? ORDER BY id",
                (conversation_id,),
            ).fetchall()
        return [json.loads(row["content"]) for row in rows]
