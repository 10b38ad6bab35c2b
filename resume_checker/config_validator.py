"""Configuration validator for Resume Checker startup checks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import ConfigurationError
from .providers import PROVIDER_DEFAULTS


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML with environment overrides applied

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Provider ---
    provider = str(raw_config.get("provider", "gemini") or "gemini").lower()
    if provider not in PROVIDER_DEFAULTS:
        errors.append(ConfigError(
            field="provider",
            message=f"provider must be one of {sorted(PROVIDER_DEFAULTS)}, got {provider!r}",
            severity=Severity.ERROR,
        ))

    # --- API Key ---
    if not _resolve_api_key_value(provider, str(raw_config.get("api_key", "") or "")):
        env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "API key")
        errors.append(ConfigError(
            field="api_key",
            message=f"{env_key} not set. Set the env var or add api_key to config/config.local.yaml",
            severity=Severity.ERROR,
        ))

    # --- Model ---
    model = raw_config.get("model", "gemini-2.5-flash")
    if not model or not isinstance(model, str):
        errors.append(ConfigError(
            field="model",
            message="model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Temperature ---
    temperature = raw_config.get("temperature", 0.2)
    if not isinstance(temperature, (int, float)) or temperature < 0 or temperature > 2:
        errors.append(ConfigError(
            field="temperature",
            message=f"temperature must be a number between 0 and 2, got {temperature}",
            severity=Severity.ERROR,
        ))

    # --- Max tokens ---
    max_tokens = raw_config.get("max_tokens", 4096)
    if not isinstance(max_tokens, int) or max_tokens <= 0:
        errors.append(ConfigError(
            field="max_tokens",
            message=f"max_tokens must be a positive integer, got {max_tokens}",
            severity=Severity.ERROR,
        ))

    # --- Port ---
    port = raw_config.get("port", 5000)
    if not _is_valid_port(port):
        errors.append(ConfigError(
            field="port",
            message=f"port must be an integer between 1 and 65535, got {port!r}",
            severity=Severity.ERROR,
        ))

    # --- Upload ---
    upload = raw_config.get("upload") or {}
    max_bytes = upload.get("max_bytes", 5 * 1024 * 1024)
    if not isinstance(max_bytes, int) or max_bytes <= 0:
        errors.append(ConfigError(
            field="upload.max_bytes",
            message=f"upload.max_bytes must be a positive integer, got {max_bytes}",
            severity=Severity.ERROR,
        ))

    # --- Evaluation ---
    evaluation = raw_config.get("evaluation") or {}
    max_chars = evaluation.get("max_prompt_chars", 12000)
    if not isinstance(max_chars, int) or max_chars <= 0:
        errors.append(ConfigError(
            field="evaluation.max_prompt_chars",
            message=f"evaluation.max_prompt_chars must be a positive integer, got {max_chars}",
            severity=Severity.ERROR,
        ))

    timeout = evaluation.get("timeout_seconds", 60.0)
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        errors.append(ConfigError(
            field="evaluation.timeout_seconds",
            message=f"evaluation.timeout_seconds must be a positive number or null, got {timeout}",
            severity=Severity.ERROR,
        ))
    elif timeout is None:
        errors.append(ConfigError(
            field="evaluation.timeout_seconds",
            message="No timeout on model calls; a slow provider will hold requests open",
            severity=Severity.WARNING,
        ))

    max_attempts = evaluation.get("max_attempts", 1)
    if not isinstance(max_attempts, int) or not 1 <= max_attempts <= 5:
        errors.append(ConfigError(
            field="evaluation.max_attempts",
            message=f"evaluation.max_attempts must be an integer between 1 and 5, got {max_attempts}",
            severity=Severity.ERROR,
        ))

    return errors


def _is_valid_port(port: Any) -> bool:
    if isinstance(port, bool):
        return False
    try:
        value = int(port)
    except (TypeError, ValueError):
        return False
    return 0 < value < 65536


def _resolve_api_key_value(provider: str, config_api_key: str) -> str:
    """Resolve API key from env or config value without side effects.

    Returns the resolved key string, or empty string if unresolvable.
    """
    # Env var takes priority
    env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "")
    if env_key and os.environ.get(env_key, ""):
        return os.environ[env_key]

    if not config_api_key:
        return ""

    # Not a placeholder
    if not config_api_key.startswith("${"):
        return config_api_key

    # Resolve ${VAR_NAME} placeholder
    if config_api_key.endswith("}"):
        var_name = config_api_key[2:-1]
        return os.environ.get(var_name, "")

    return ""


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)


def ensure_valid_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate config and raise on errors; return remaining warnings.

    Raises:
        ConfigurationError: listing every error-level issue.
    """
    issues = validate_config(raw_config)
    if has_errors(issues):
        details = "; ".join(
            f"{issue.field}: {issue.message}" for issue in issues if issue.severity == Severity.ERROR
        )
        raise ConfigurationError(f"Invalid configuration: {details}")
    return [issue for issue in issues if issue.severity == Severity.WARNING]
