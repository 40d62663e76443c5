"""Persistent key-value store and the typed repository built on it."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging_config import get_logger

logger = get_logger(__name__)

USERS_KEY = "users"
SESSION_KEY = "session"
THEME_KEY = "theme"
HISTORY_KEY = "history"


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    password: str
    role: str
    joined_at: str

    def without_password(self) -> "SessionUser":
        return SessionUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            joined_at=self.joined_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "role": self.role,
            "joinedAt": self.joined_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            password=data["password"],
            role=data["role"],
            joined_at=data["joinedAt"],
        )


@dataclass
class SessionUser:
    id: str
    name: str
    email: str
    role: str
    joined_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "joinedAt": self.joined_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionUser":
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            role=data["role"],
            joined_at=data["joinedAt"],
        )


class KeyValueStore:
    """One JSON document per key inside a data directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as exc:
            logger.warning("Treating unreadable record %r as missing: %s", key, exc)
            return default

    def set(self, key: str, value: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            os.unlink(tmp_name)
            raise
        logger.debug("Wrote record %r", key)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            logger.debug("Removed record %r", key)

    def contains(self, key: str) -> bool:
        return self._path(key).exists()

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"


class Repository:
    """Typed accessors for every record kind the tool persists."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def users(self) -> List[UserRecord]:
        return [UserRecord.from_dict(raw) for raw in self.store.get(USERS_KEY, [])]

    def save_users(self, users: List[UserRecord]) -> None:
        self.store.set(USERS_KEY, [user.to_dict() for user in users])

    def session(self) -> Optional[SessionUser]:
        raw = self.store.get(SESSION_KEY)
        return SessionUser.from_dict(raw) if raw else None

    def save_session(self, user: SessionUser) -> None:
        self.store.set(SESSION_KEY, user.to_dict())

    def clear_session(self) -> None:
        self.store.remove(SESSION_KEY)

    def has_session(self) -> bool:
        return self.session() is not None

    def theme(self) -> Optional[str]:
        return self.store.get(THEME_KEY)

    def save_theme(self, theme: str) -> None:
        self.store.set(THEME_KEY, theme)

    def history(self) -> List[Dict[str, Any]]:
        return self.store.get(HISTORY_KEY, [])

    def save_history(self, entries: List[Dict[str, Any]]) -> None:
        self.store.set(HISTORY_KEY, entries)


def open_repository(data_dir: Path) -> Repository:
    return Repository(KeyValueStore(data_dir))
