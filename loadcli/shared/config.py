import json
from pathlib import Path
from typing import Dict, Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from loadcli.const import (
    CONFIG_FILE_NAME,
    DEFAULT_CONNECTIONS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROGRESS_BATCH_SIZE,
    DEFAULT_REMAINDER_POLICY,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_REQUESTS,
    DEFAULT_SIMULATE_MEAN_DELAY_MS,
    DEFAULT_SIMULATE_STD_DELAY_MS,
    DEFAULT_TARGET_URI,
    LIBRARY_LOG_LEVELS,
)


class Config(BaseSettings):
    """Global configuration settings for loadcli."""

    connections: int = DEFAULT_CONNECTIONS
    requests: int = DEFAULT_REQUESTS
    target_uri: str = DEFAULT_TARGET_URI
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    progress_batch_size: int = DEFAULT_PROGRESS_BATCH_SIZE
    remainder_policy: str = DEFAULT_REMAINDER_POLICY
    log_level: str = DEFAULT_LOG_LEVEL
    simulate_mean_delay_ms: float = DEFAULT_SIMULATE_MEAN_DELAY_MS
    simulate_std_delay_ms: float = DEFAULT_SIMULATE_STD_DELAY_MS
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    model_config = SettingsConfigDict(
        env_prefix='LOADCLI_',
    )

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                return json.load(f)
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
