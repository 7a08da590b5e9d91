"""
Runtime Configuration

Central configuration for tree construction and logging.
None of these settings change hash output; they only affect how the work
is scheduled and reported.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "TWINMERKLE_"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class MerkleConfig:
    """
    Configuration for tree construction.

    The thread pool only pays off with a hasher that releases the GIL while
    hashing. hashlib holds it for the short leaf and node payloads of the
    default SHA-256 hasher, so threading is off by default.
    """
    parallel: bool = False
    # Minimum number of hash jobs in a layer before a thread pool is used
    parallel_threshold: int = 1024
    max_workers: int = 4

    def __post_init__(self):
        if self.parallel_threshold < 1:
            raise ValueError(
                f"parallel_threshold must be >= 1, got {self.parallel_threshold}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def use_pool(self, jobs: int) -> bool:
        """Whether a layer with this many hash jobs should be hashed concurrently."""
        return self.parallel and self.max_workers > 1 and jobs >= self.parallel_threshold


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for twinmerkle.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - TWINMERKLE_PARALLEL: Enable threaded layer hashing (true/false, default false)
        - TWINMERKLE_PARALLEL_THRESHOLD: Jobs per layer before threading
        - TWINMERKLE_MAX_WORKERS: Thread pool size
        - TWINMERKLE_LOG_LEVEL: Log level name
        - TWINMERKLE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}PARALLEL"):
            overrides.setdefault("merkle", {})["parallel"] = _env_flag(
                f"{ENV_PREFIX}PARALLEL", "false"
            )
        if os.getenv(f"{ENV_PREFIX}PARALLEL_THRESHOLD"):
            overrides.setdefault("merkle", {})["parallel_threshold"] = int(
                os.getenv(f"{ENV_PREFIX}PARALLEL_THRESHOLD", "1024")
            )
        if os.getenv(f"{ENV_PREFIX}MAX_WORKERS"):
            overrides.setdefault("merkle", {})["max_workers"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_WORKERS", "4")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {})
        logging_data = data.get("logging", {})

        merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()
        logging_conf = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            merkle=merkle,
            logging=logging_conf,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.

        Raises:
            ValueError: If an overridden value fails validation
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        # replace() re-runs __post_init__ validation
        return RuntimeConfig(
            merkle=replace(self.merkle, **overrides.get("merkle", {})),
            logging=replace(self.logging, **overrides.get("logging", {})),
            extra=copy.deepcopy(self.extra),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "parallel": self.merkle.parallel,
                "parallel_threshold": self.merkle.parallel_threshold,
                "max_workers": self.merkle.max_workers,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
