from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict, List, Optional
import yaml

from interactcord.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_LANGUAGE_DIR = (Path(__file__).parents[1] / "resources" / "languages").resolve()

DEFAULT_HANDLER_MODULES: List[str] = [
    "interactcord.handlers.commands.ping",
    "interactcord.handlers.commands.help",
    "interactcord.handlers.interactions.delete_message",
    "interactcord.handlers.interactions.mention_user",
]

DEFAULT_NOT_AVAILABLE_MESSAGE = "This Command is currently not available"


class AppConfig:
    """File-lock based accessor around the YAML-based application configuration.

    The class caches contents of ``./config/app_config.yml`` and exposes
    dictionary-like access helpers plus typed shortcuts for the discord,
    handlers, language and cooldown sections. Uses fcntl file locks for safe
    concurrent access across processes.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config %s is not a mapping; ignoring it.", self.config_path)
            return {}
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        Returns the raw mapping that was loaded (an empty dict on error).
        """
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping (do not mutate)."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def home_guild_id(self) -> Optional[int]:
        """Return the guild that receives home-guild-only commands, if configured."""
        value = self._section("discord").get("home_guild_id")
        try:
            return int(value) if value else None
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid home_guild_id %r; ignoring it.", value)
            return None

    @property
    def activity_type(self) -> str:
        return str(self._section("discord").get("activity_type") or "CUSTOM").upper()

    @property
    def activity_name(self) -> str:
        return str(self._section("discord").get("activity_name") or "")

    @property
    def streaming_url(self) -> str:
        return str(self._section("discord").get("streaming_url") or "")

    @property
    def handler_modules(self) -> List[str]:
        """Return the modules whose import registers the bot's handlers."""
        modules = self._section("handlers").get("modules")
        if not isinstance(modules, list) or not modules:
            return list(DEFAULT_HANDLER_MODULES)
        return [str(module) for module in modules]

    @property
    def not_available_message(self) -> str:
        return str(self._section("handlers").get("not_available_message") or DEFAULT_NOT_AVAILABLE_MESSAGE)

    @property
    def language_dir(self) -> Path:
        """Return the root directory of the YAML language bundles."""
        value = self._section("language").get("directory")
        return Path(value).resolve() if value else DEFAULT_LANGUAGE_DIR

    @property
    def validate_cooldowns(self) -> bool:
        """When True, handlers with unusable cooldowns are rejected at registration."""
        return bool(self._section("cooldowns").get("validate_on_registration", False))


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
