"""JSON-file-backed implementation of ProfileCache."""

from __future__ import annotations

import json
from pathlib import Path

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.profile import PROFILE_KEYS
from marketplace.domain.repository.profile_cache import ProfileCache


class JsonProfileCache(ProfileCache):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get(self, key: str) -> str | None:
        self._check_key(key)
        return self._load_raw().get(key)

    def set(self, key: str, value: str) -> None:
        self._check_key(key)
        raw = self._load_raw()
        raw[key] = value
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    @staticmethod
    def _check_key(key: str) -> None:
        if key not in PROFILE_KEYS:
            raise ValidationError(f"Unknown profile field '{key}'")

    def _load_raw(self) -> dict[str, str]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
