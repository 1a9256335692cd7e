"""Character record loaded from and saved to a JSON document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PRIVATE_PREFIX = "_"
LEVEL_UP_DIR = "level-up"


def is_private(name: str) -> bool:
    return name.startswith(PRIVATE_PREFIX)


def proficiency_bonus_for_level(level: int) -> int:
    """Proficiency bonus by character level (2 at level 1, 6 from level 17)."""
    if level < 5:
        return 2
    elif level < 9:
        return 3
    elif level < 13:
        return 4
    elif level < 17:
        return 5
    return 6


class CharacterRecord:
    """Flat document of named fields plus the derived class feature table."""

    def __init__(self, data: dict[str, Any] | None = None, path: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self.path = path
        self.class_info: dict[str, Any] = {}
        if data:
            self.update(data)

    def load(self, path: str | Path) -> None:
        """Replace all fields with the contents of ``path``."""
        path = Path(path).expanduser()
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Character file must hold a JSON object: {path}")

        self.path = path
        self._data = {}
        self.update(data)
        self.class_info = self._load_class_info(path.parent)
        logger.info("Loaded character %r from %s", self.name, path)

    def save(self, path: str | Path | None = None) -> Path:
        """Write all public fields, defaulting to the last loaded path."""
        target = Path(path).expanduser() if path else self.path
        if target is None:
            raise ValueError("No file path to save the character to")
        self.path = target

        public = {key: value for key, value in self._data.items() if not is_private(key)}
        with open(target, "w", encoding="utf-8") as f:
            json.dump(public, f, indent=2)
            f.write("\n")
        logger.info("Saved character to %s", target)
        return target

    def _load_class_info(self, base_dir: Path) -> dict[str, Any]:
        char_class = self._data.get("class")
        if not char_class:
            return {}
        archetype = self._data.get("archetype")
        stem = f"{char_class}-{archetype}" if archetype else str(char_class)
        info_path = base_dir / LEVEL_UP_DIR / f"{stem}.json"
        try:
            with open(info_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning("No class table found at %s", info_path)
            return {}
        except json.JSONDecodeError:
            logger.exception("Invalid class table: %s", info_path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Class table must hold a JSON object: %s", info_path)
            return {}
        return data

    # --- Field access ---

    def update(self, data: dict[str, Any]) -> None:
        for key, value in data.items():
            self._data[key] = value

    def has(self, name: str) -> bool:
        return bool(name) and not is_private(name) and name in self._data

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    @property
    def fields(self) -> list[str]:
        """Public field names."""
        return [key for key in self._data if not is_private(key)]

    @property
    def name(self) -> str:
        return str(self._data.get("name", ""))

    @property
    def level(self) -> int:
        return int(self._data.get("level", 1) or 1)

    @property
    def proficiency_bonus(self) -> int:
        return proficiency_bonus_for_level(self.level)

    @property
    def features_table(self) -> dict[str, Any]:
        features = self.class_info.get("features")
        return features if isinstance(features, dict) else {}
