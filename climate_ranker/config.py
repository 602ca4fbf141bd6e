"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults and profiles
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``CLIMATE_RANKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Scoring profiles are declared under ``[profiles.<name>]``.  Every declared
profile is checked with ``validate_profile()`` at load time, so an
inconsistent weight/threshold pair fails here rather than mid-ranking.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from climate_ranker.errors import ConfigurationError
from climate_ranker.scoring.profile import (
    BUILTIN_PROFILES,
    ScoringProfile,
    validate_profile,
)

logger = logging.getLogger(__name__)


# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Attributes:
        logging:         Logging section.
        default_profile: Profile name used when the caller does not pick one.
        profiles:        Profile name -> ``ScoringProfile``.
        debug:           Verbose diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    default_profile: str = "credibility_v1"
    profiles: dict[str, ScoringProfile] = BUILTIN_PROFILES
    debug: bool = False

    def profile(self, name: Optional[str] = None) -> ScoringProfile:
        """Look up a profile by name (``default_profile`` when omitted).

        Raises:
            ConfigurationError: If no profile has that name.
        """
        key = name or self.default_profile
        try:
            return self.profiles[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown scoring profile '{key}'. "
                f"Available: {sorted(self.profiles)}."
            ) from None


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load, merge, and validate application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If a section has the wrong shape.
        ConfigurationError: If a profile breaks the scoring contract or the
            default profile is not declared.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply CLIMATE_RANKER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    config = _build_app_config(raw)
    logger.debug(
        "Loaded config from %s | profiles=%s default=%s",
        config_path, sorted(config.profiles), config.default_profile,
    )
    return config


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply CLIMATE_RANKER_* env vars to the raw config dict.

    Supported overrides:
      CLIMATE_RANKER_PROFILE    → raw["scoring"]["default_profile"]
      CLIMATE_RANKER_LOG_LEVEL  → raw["logging"]["level"]
      CLIMATE_RANKER_DEBUG      → raw["debug"]
    """
    if profile := os.environ.get("CLIMATE_RANKER_PROFILE"):
        raw.setdefault("scoring", {})["default_profile"] = profile

    if log_level := os.environ.get("CLIMATE_RANKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("CLIMATE_RANKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` and validate every profile."""
    profiles: dict[str, ScoringProfile] = dict(BUILTIN_PROFILES)
    for name, section in raw.get("profiles", {}).items():
        profiles[name] = ScoringProfile(**{"name": name, **section})

    for profile in profiles.values():
        validate_profile(profile)

    scoring = raw.get("scoring", {})
    config = AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        default_profile=scoring.get("default_profile", "credibility_v1"),
        profiles=profiles,
        debug=raw.get("debug", False),
    )
    config.profile()  # default must resolve
    return config
