from pathlib import Path
import yaml
import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv
from cache_warmer.models.config_models import CrawlerConfig

ENV_PREFIX = "CACHE_WARMER_"
DEFAULT_CONFIG_PATH = Path("config") / "crawler.yaml"

class ConfigService:
    """Service for building the crawler configuration"""

    def __init__(self, config_path: Optional[Path] = None, env_file: Optional[Path] = None):
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._explicit_path = config_path is not None
        self._env_file = env_file
        self._env_loaded = False
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from .env file"""
        if not self._env_loaded:
            if self._env_file is not None:
                load_dotenv(self._env_file)
            else:
                load_dotenv()

            self._env_loaded = True

    def env_var(self, key: str, default: Optional[str] = None, required: bool = False) -> str:
        """Get environment variable with validation"""
        value = os.getenv(key, default)

        if required and not value:
            raise ValueError(f"Required environment variable '{key}' is not set")

        return value

    @property
    def log_level(self) -> str:
        """Log level from environment"""
        return self.env_var("LOG_LEVEL", default="INFO")

    @property
    def config_path(self) -> Path:
        return self._config_path

    def file_settings(self) -> Dict[str, Any]:
        """Settings from the YAML config file; empty if the default file does not exist"""
        if not self._config_path.exists():
            if self._explicit_path:
                raise FileNotFoundError(f"Configuration file not found at {self._config_path}")
            return {}

        with open(self._config_path, "r", encoding="utf-8") as file:
            try:
                raw_config = yaml.safe_load(file)
            except yaml.YAMLError as e:
                raise ValueError(f"Error parsing configuration: {e}")

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ValueError(f"Invalid configuration format in {self._config_path}")

        return raw_config

    def env_settings(self) -> Dict[str, str]:
        """Settings from CACHE_WARMER_* environment variables"""
        settings = {}
        for field in CrawlerConfig.model_fields:
            value = self.env_var(f"{ENV_PREFIX}{field.upper()}")
            if value:
                settings[field] = value
        return settings

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> CrawlerConfig:
        """
        Build the crawler configuration.

        Precedence, highest first: explicit overrides, environment, YAML file, defaults.
        Overrides whose value is None are ignored.
        """
        settings: Dict[str, Any] = {}
        settings.update(self.file_settings())
        settings.update(self.env_settings())
        settings.update({key: value for key, value in (overrides or {}).items() if value is not None})

        return CrawlerConfig(**settings)
