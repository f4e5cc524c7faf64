"""
Configuration Manager - persisted application settings

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19
"""

import json
import os
import platform
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

APP_NAME = "container-image-catalog"
CONFIG_VERSION = "1.0"
MAX_RECENT_REGISTRIES = 10

DEFAULT_SETTINGS = {
    "registry_url": None,
    "timeout": 30.0,
    "verify_tls": True,
}


def platform_config_base() -> Path:
    """Directory under which per-user application config lives"""
    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    if system == "windows":
        return Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


class ConfigManager:
    """Reads and writes the catalog's settings file.

    Holds the default registry, connection settings and the recently used
    registries. Credentials and fetched catalog data are never written here.
    """

    def __init__(self, app_name: str = APP_NAME, config_dir: Optional[Path] = None):
        self.app_name = app_name
        self._use_directory(Path(config_dir) if config_dir else platform_config_base() / app_name)

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            os.chmod(self.config_dir, 0o700)
        except OSError as e:
            fallback = Path(tempfile.gettempdir()) / app_name
            logger.warning(f"Cannot use config directory {self.config_dir} ({e}), falling back to {fallback}")
            self._use_directory(fallback)
            self.config_dir.mkdir(exist_ok=True)

    def _use_directory(self, config_dir: Path) -> None:
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self.backup_file = config_dir / "config.backup.json"

    def _default_config(self) -> Dict[str, Any]:
        return {
            "version": CONFIG_VERSION,
            "last_updated": datetime.now().isoformat(),
            "app_settings": dict(DEFAULT_SETTINGS),
            "recent_registries": [],
        }

    def load_config(self) -> Dict[str, Any]:
        """Current config; defaults when the file is missing or unreadable"""
        if not self.config_file.exists():
            logger.debug("No config file yet, using defaults")
            return self._default_config()

        try:
            config = json.loads(self.config_file.read_text())
        except json.JSONDecodeError as e:
            logger.error(f"Config file {self.config_file} is not valid JSON: {e}")
            return self._default_config()
        except OSError as e:
            logger.error(f"Cannot read config file {self.config_file}: {e}")
            return self._default_config()

        if not isinstance(config, dict) or not isinstance(config.get("app_settings"), dict):
            logger.warning(f"Ignoring config file {self.config_file} with unexpected layout")
            return self._default_config()

        # Older files may predate some settings
        for key, value in DEFAULT_SETTINGS.items():
            config["app_settings"].setdefault(key, value)
        if not isinstance(config.get("recent_registries"), list):
            config["recent_registries"] = []
        return config

    def save_config(self, config: Dict[str, Any]) -> bool:
        """Write config, keeping the previous file as a backup"""
        config["last_updated"] = datetime.now().isoformat()
        try:
            if self.config_file.exists():
                self.backup_file.write_text(self.config_file.read_text())
            self.config_file.write_text(json.dumps(config, indent=2, sort_keys=True))
            os.chmod(self.config_file, 0o600)
        except (OSError, TypeError) as e:
            logger.error(f"Failed to save config to {self.config_file}: {e}")
            return False

        logger.info(f"Config saved to {self.config_file}")
        return True

    def get_setting(self, key: str, default: Any = None) -> Any:
        """One app setting, or default when it is unset"""
        value = self.load_config()["app_settings"].get(key)
        return default if value is None else value

    def update_settings(self, **settings) -> bool:
        config = self.load_config()
        config["app_settings"].update(settings)
        return self.save_config(config)

    def remember_registry(self, registry_url: str) -> bool:
        """Make registry_url the default and move it to the front of the recent list"""
        registry_url = registry_url.rstrip("/")
        config = self.load_config()

        others = [url for url in config["recent_registries"] if url != registry_url]
        config["recent_registries"] = ([registry_url] + others)[:MAX_RECENT_REGISTRIES]
        config["app_settings"]["registry_url"] = registry_url
        return self.save_config(config)

    def list_recent_registries(self) -> List[str]:
        return list(self.load_config()["recent_registries"])

    def get_config_info(self) -> Dict[str, Any]:
        """Where the config lives and what it holds, for diagnostics"""
        config = self.load_config()
        return {
            "config_dir": str(self.config_dir),
            "config_file": str(self.config_file),
            "config_exists": self.config_file.exists(),
            "backup_exists": self.backup_file.exists(),
            "version": config.get("version", "unknown"),
            "last_updated": config.get("last_updated", "never"),
            "recent_registry_count": len(config["recent_registries"]),
        }
