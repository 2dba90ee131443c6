# src/leversguard/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from leversguard.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class HostSettings(BaseModel):
    """The 'host' section of settings.json: limits and timings of batch and watch runs."""
    model_config = ConfigDict(frozen=True)

    size_gate_kb: int = Field(default=500, ge=1)
    extensions: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".html")
    excluded_dirs: Tuple[str, ...] = ("node_modules",)
    max_files: int = Field(default=5000, ge=1)
    workers: int = Field(default=1, ge=1)
    debounce_ms: int = Field(default=300, ge=0)
    watch_interval_s: float = Field(default=0.5, gt=0)


class ConfigManager:
    """
    Singleton holding the packaged settings.json.
    The raw file stays available through dotted lookups; the host section is
    validated once per (re)load.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.host = HostSettings()
        self.reset()

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value, e.g. 'debug.level'.
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def reset(self):
        """(Re)loads settings.json. A missing or broken file leaves every setting at its default."""
        self._config = self._read_file()
        self.host = self._parse_host(self._config.get("host"))

    @staticmethod
    def _read_file() -> Dict[str, Any]:
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using defaults.", config_path)
            return {}
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.error("settings.json does not contain a JSON object. Using defaults.")
            return {}
        logger.debug("Configuration has been (re)loaded from settings.json.")
        return data

    @staticmethod
    def _parse_host(section: Any) -> HostSettings:
        if section is None:
            return HostSettings()
        try:
            return HostSettings.model_validate(section)
        except ValidationError as e:
            logger.warning("Invalid 'host' settings, using defaults: %s", e)
            return HostSettings()


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
