"""JSON persistence for the bonus configuration record."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from seated_fishing.config import BonusConfig


class JsonSettingsStore:
    """Loads and saves :class:`BonusConfig` snapshots as a JSON document.

    Keys missing from the file keep their defaults. An unreadable file is
    logged and treated as if it held no settings.
    """

    def __init__(self, file_path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._path = Path(file_path)
        self._logger = logger or logging.getLogger("seated_fishing.settings_store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> BonusConfig:
        if not self._path.exists():
            return BonusConfig()

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            self._logger.warning("settings_file_unreadable", extra={"path": str(self._path)})
            return BonusConfig()

        if not isinstance(payload, dict):
            self._logger.warning("settings_file_invalid", extra={"path": str(self._path)})
            return BonusConfig()

        known = {key: value for key, value in payload.items() if key in BonusConfig.model_fields}
        try:
            return BonusConfig(**known)
        except ValidationError as exc:
            self._logger.warning(
                "settings_file_invalid",
                extra={"path": str(self._path), "errors": exc.error_count()},
            )
            return BonusConfig()

    def save(self, config: BonusConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            handle.write(config.model_dump_json(indent=2) + "\n")
