"""Configuration management for pod document operations."""

import json
import os
import shutil
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from common.constants import DEFAULT_IDENTITY_PROVIDER, DEFAULT_POD_SCHEME, DEFAULT_TIMEOUT_SECONDS
from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages pod settings from the environment and an optional JSON file."""

    DEFAULT_CONFIG = {
        "identity_provider": os.environ.get("POD_IDENTITY_PROVIDER", DEFAULT_IDENTITY_PROVIDER),
        "pod_scheme": os.environ.get("POD_SCHEME", DEFAULT_POD_SCHEME),
        "timeout": int(os.environ.get("POD_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
    }

    def __init__(self, config_path: Optional[Path] = None, **overrides):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.podocs/config.json);
                None keeps the configuration in memory only
            **overrides: Values taking precedence over file and environment
        """
        self.config_path = config_path
        self.data = self._load()
        self.data.update(overrides)

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        config = self.DEFAULT_CONFIG.copy()
        if self.config_path is None:
            return config

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    config.update(json.load(f))
                return config
            except (json.JSONDecodeError, IOError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                logger.warning(f"Unreadable config {self.config_path} ({e}), backing up to {backup_path}")
                shutil.copy(self.config_path, backup_path)
                return config

        self.save(config)
        return config

    def save(self, data: Optional[dict] = None) -> None:
        """Save current configuration to file."""
        if self.config_path is None:
            return
        with open(self.config_path, 'w') as f:
            json.dump(data if data is not None else self.data, f, indent=2)

    def get_identity_provider(self) -> str:
        """
        Get the pod-hosting origin used to build WebIDs from user names.

        Returns:
            Origin string (e.g., "https://opencommons.net")
        """
        return self.data.get('identity_provider', DEFAULT_IDENTITY_PROVIDER).rstrip('/')

    def get_identity_provider_host(self) -> str:
        return urlparse(self.get_identity_provider()).netloc

    def get_pod_scheme(self) -> str:
        return self.data.get('pod_scheme', DEFAULT_POD_SCHEME)

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', DEFAULT_TIMEOUT_SECONDS)
