"""
FSGAME Configuration
Single source of truth for all settings.
Load once at startup, pass to all components.
"""
import os
import json
from pathlib import Path
from .utils.logger import logger


# Default config values
DEFAULTS = {
    "network": {
        "timeout": 30.0,
        "user_agent": "fsgame-ingest/1.0"
    },
    "storage": {
        "db_path": "fsgame_storage.db",
        "table": "files"
    },
    "viewer": {
        "entry": "index.html"
    },
    "packager": {
        "fragment_size_kb": 1024,
        "compression_level": 9,
        "version": 1
    }
}


class FSGameConfig:
    def __init__(self, config_path: str = None):
        self._config = self._deep_copy(DEFAULTS)

        if config_path:
            self.config_path = Path(config_path)
        elif os.environ.get('FSGAME_CONFIG'):
            self.config_path = Path(os.environ['FSGAME_CONFIG'])
        else:
            # Look for config in the working directory
            self.config_path = Path.cwd() / 'fsgame.config.json'

        if self.config_path.exists():
            self._load()
        else:
            logger.debug(f"No config file found at {self.config_path}, using defaults")

    def _load(self):
        """Load and merge config file over defaults"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
            self._deep_merge(self._config, user_config)
            logger.info(f"Loaded config from {self.config_path}")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}, using defaults")
        except OSError as e:
            logger.error(f"Failed to load config: {e}, using defaults")

    def load(self, config_path: str):
        """Reset to defaults and merge the file at config_path over them"""
        self.config_path = Path(config_path)
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        self._config = self._deep_copy(DEFAULTS)
        self._load()

    def save(self, path: str = None):
        """Save current config to file"""
        out_path = Path(path) if path else self.config_path
        with open(out_path, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2)
        logger.info(f"Config saved to {out_path}")

    def get(self, *keys, default=None):
        """
        Get a nested config value by key path.
        e.g. config.get('network', 'timeout')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, *keys_and_value):
        """
        Set a nested config value.
        e.g. config.set('viewer', 'entry', 'main.html')
        """
        *keys, value = keys_and_value
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    # ── Convenience properties ─────────────────────────────────────────────

    @property
    def timeout(self) -> float:
        return self.get('network', 'timeout', default=30.0)

    @property
    def user_agent(self) -> str:
        return self.get('network', 'user_agent', default='fsgame-ingest/1.0')

    @property
    def db_path(self) -> str:
        return self.get('storage', 'db_path', default='fsgame_storage.db')

    @property
    def table(self) -> str:
        return self.get('storage', 'table', default='files')

    @property
    def entry(self) -> str:
        return self.get('viewer', 'entry', default='index.html')

    @property
    def fragment_size(self) -> int:
        return self.get('packager', 'fragment_size_kb', default=1024) * 1024

    @property
    def compression_level(self) -> int:
        return self.get('packager', 'compression_level', default=9)

    @property
    def archive_version(self) -> int:
        return self.get('packager', 'version', default=1)

    # ── Helpers ────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_copy(d: dict) -> dict:
        import copy
        return copy.deepcopy(d)

    @staticmethod
    def _deep_merge(base: dict, override: dict):
        """Merge override into base recursively, modifies base in place"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                FSGameConfig._deep_merge(base[key], value)
            else:
                base[key] = value


# Singleton, import this everywhere
config = FSGameConfig()

__all__ = ["FSGameConfig", "config"]
