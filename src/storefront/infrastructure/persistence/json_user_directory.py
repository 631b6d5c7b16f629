"""JSON-file-backed UserDirectory: ``[{"id": ..., "email": ...}, ...]``."""

from __future__ import annotations

from pathlib import Path

from storefront.application.ports import UserDirectory
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonUserDirectory(UserDirectory):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def email_for(self, user_id: str) -> str | None:
        for raw in self._store.load():
            if raw["id"] == user_id:
                return raw.get("email")
        return None

    def register(self, user_id: str, email: str) -> None:
        with self._store.locked() as records:
            for raw in records:
                if raw["id"] == user_id:
                    raw["email"] = email
                    return
            records.append({"id": user_id, "email": email})
