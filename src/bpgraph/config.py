from typing import Any, Literal, Optional
import json
import os
from pydantic import BaseModel, Field, ValidationError
from loguru import logger

# --- Settings Models ---
class GeneralSettings(BaseModel):
    debug_mode: bool = False
    log_dir: Optional[str] = None  # No file sink when unset

class LayoutSettings(BaseModel):
    node_width: float = 200.0
    node_height: float = 100.0
    arrow_spacing: float = 250.0
    legacy_origin: float = 100.0
    legacy_spacing: float = 300.0
    tree_indent: float = 200.0
    tree_row_height: float = 120.0

class LegacySettings(BaseModel):
    identity_policy: Literal["literal", "windowed"] = "literal"
    reuse_window: int = Field(default=3, ge=0)

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    legacy: LegacySettings = Field(default_factory=LegacySettings)


def get_default_config() -> AppConfig:
    return AppConfig()


# --- Manager ---
class ConfigManager:
    """
    Manages parser and layout configuration with persistence.
    """
    def __init__(self, filepath: str = "bpgraph.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic and autosave."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
             raise ValueError(f"Invalid key: {key} in section {section}")

        raw = section_obj.model_dump()
        raw[key] = value
        try:
            validated = type(section_obj).model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {section}.{key}: {value!r}") from e

        setattr(self._data, section, validated)
        self._save()

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        else:
            logger.debug(f"No config at {self.filepath}, using defaults")

    def _save(self):
        """Persist current config to JSON file."""
        if self.filepath.endswith('.toml'):
            logger.warning(f"Not overwriting TOML config {self.filepath}")
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
