import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()
from pydantic import BaseModel, Field  # noqa: E402

DEFAULT_SETTINGS_FILE = "~/.wrangler-profiles/settings.yaml"


class StorageConfig(BaseModel):
    profiles_dir: str = "~/.wrangler-profiles"

    @property
    def path(self) -> Path:
        return Path(self.profiles_dir).expanduser()


class WranglerConfig(BaseModel):
    executable: str = "wrangler"
    # wrangler reads its OAuth session from this single file
    config_file: str = "~/.wrangler/config/default.toml"
    whoami_timeout: int = 30

    @property
    def config_path(self) -> Path:
        return Path(self.config_file).expanduser()


class EnvConfig(BaseModel):
    account_id_var: str = "CLOUDFLARE_ACCOUNT_ID"
    api_token_var: str = "CLOUDFLARE_API_TOKEN"


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    wrangler: WranglerConfig = Field(default_factory=WranglerConfig)
    env: EnvConfig = Field(default_factory=EnvConfig)
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AppConfig":
        """Load configuration from a YAML file, with env var overrides."""
        if path is None:
            path = os.getenv("WRANGLER_PROFILES_SETTINGS", DEFAULT_SETTINGS_FILE)
        settings_path = Path(path).expanduser()

        data = {}
        if settings_path.exists():
            with open(settings_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        # Allow individual sections to be partial
        loaded = cls(**data)

        profiles_dir = os.getenv("WRANGLER_PROFILES_DIR")
        if profiles_dir:
            loaded.storage.profiles_dir = profiles_dir
        log_level = os.getenv("WRANGLER_PROFILES_LOG_LEVEL")
        if log_level:
            loaded.log_level = log_level.upper()
        return loaded


# Global config instance
config = AppConfig.load()
