"""Per-chat settings persistence.

Stores the API token, header, footer and broadcast channel for every chat.
The default backend is a single JSON object on disk keyed by chat id that is
re-read on every access and rewritten in full on every change. An in-memory
backend with the same contract is provided for tests and ephemeral runs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from ..models import ChatSettings, setting_text

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    """Key-value contract used by the pipeline and command handlers."""

    def get(self, chat_id: int | str, key: str) -> str | None: ...

    def set(self, chat_id: int | str, key: str, value: str) -> None: ...

    def delete(self, chat_id: int | str, key: str) -> bool: ...

    def get_settings(self, chat_id: int | str) -> ChatSettings: ...


class JsonFileSettingsStore:
    """Settings store backed by a flat JSON file."""

    def __init__(self, db_path: str | Path):
        """Initialize the store and create the backing file if needed.

        Args:
            db_path: Location of the JSON database file.
        """
        self.db_path = Path(db_path)
        self._ensure_file()

    def _ensure_file(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.db_path.exists():
            self.db_path.write_text("{}", encoding="utf-8")
            logger.info(f"Created settings database at {self.db_path}")

    def _load(self) -> dict[str, dict[str, Any]]:
        """Read the whole database.

        Returns:
            Parsed database, or an empty mapping if the file is unreadable.
        """
        try:
            data = json.loads(self.db_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Error reading database {self.db_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Database {self.db_path} is not a JSON object, ignoring contents")
            return {}
        return data

    def _save(self, data: dict[str, dict[str, Any]]) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # Readers never see a partially written file
        tmp = self.db_path.with_name(self.db_path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.db_path)

    def get(self, chat_id: int | str, key: str) -> str | None:
        record = self._load().get(str(chat_id))
        if not isinstance(record, dict):
            return None
        return setting_text(record.get(key))

    def set(self, chat_id: int | str, key: str, value: str) -> None:
        data = self._load()
        record = data.get(str(chat_id))
        if not isinstance(record, dict):
            record = {}
        record[key] = value
        data[str(chat_id)] = record
        self._save(data)
        logger.debug(f"Saved '{key}' for chat {chat_id}")

    def delete(self, chat_id: int | str, key: str) -> bool:
        """Remove a key for a chat.

        Returns:
            True if the key was present and removed, False otherwise.
        """
        data = self._load()
        record = data.get(str(chat_id))
        if not isinstance(record, dict) or not record.get(key):
            return False
        del record[key]
        self._save(data)
        logger.debug(f"Deleted '{key}' for chat {chat_id}")
        return True

    def get_settings(self, chat_id: int | str) -> ChatSettings:
        record = self._load().get(str(chat_id))
        return ChatSettings.from_record(record if isinstance(record, dict) else None)


class InMemorySettingsStore:
    """Settings store kept in process memory."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None):
        self._data: dict[str, dict[str, Any]] = {
            str(chat_id): dict(record) for chat_id, record in (initial or {}).items()
        }

    def get(self, chat_id: int | str, key: str) -> str | None:
        return setting_text(self._data.get(str(chat_id), {}).get(key))

    def set(self, chat_id: int | str, key: str, value: str) -> None:
        self._data.setdefault(str(chat_id), {})[key] = value

    def delete(self, chat_id: int | str, key: str) -> bool:
        record = self._data.get(str(chat_id))
        if not record or not record.get(key):
            return False
        del record[key]
        return True

    def get_settings(self, chat_id: int | str) -> ChatSettings:
        return ChatSettings.from_record(self._data.get(str(chat_id)))
