"""Application configuration loaded from YAML files and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_validator import ensure_valid_config

DEFAULT_CONFIG_PATH = "config/config.local.yaml"
DEFAULT_PORT = 5000
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass
class AppConfig:
    """Runtime settings for the resume checker."""

    api_key: str = ""
    provider: str = "gemini"
    model: str = "gemini-2.5-flash"
    api_base: str = ""
    temperature: float = 0.2
    max_tokens: int = 4096
    port: int = DEFAULT_PORT
    upload_dir: str = "uploads"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_prompt_chars: int = 12000
    timeout_seconds: Optional[float] = 60.0
    max_attempts: int = 1
    strict_schema: bool = False


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load raw configuration dictionary from YAML.

    ``config/config.yaml`` provides defaults and ``config/config.local.yaml``
    (not committed, may hold secrets) is merged over it. Missing files are
    treated as empty; an explicit non-local path is loaded as-is.
    """
    repo_root = Path(__file__).resolve().parents[1]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    def _load_yaml(path: Path) -> dict:
        if not path.exists():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file must be a mapping: {path}")
            return data

    target = _resolve(config_path)
    if Path(config_path).name != "config.local.yaml":
        return _load_yaml(target)

    base = _load_yaml(_resolve("config/config.yaml"))
    return _deep_merge(base, _load_yaml(target))


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def apply_env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay process environment variables on a raw config mapping."""
    data = _deep_merge(raw, {})
    if os.environ.get("RESUME_CHECKER_PROVIDER"):
        data["provider"] = os.environ["RESUME_CHECKER_PROVIDER"]
    if os.environ.get("RESUME_CHECKER_MODEL"):
        data["model"] = os.environ["RESUME_CHECKER_MODEL"]
    if os.environ.get("RESUME_CHECKER_API_BASE"):
        data["api_base"] = os.environ["RESUME_CHECKER_API_BASE"]
    if os.environ.get("PORT"):
        data["port"] = os.environ["PORT"]
    if os.environ.get("RESUME_CHECKER_UPLOAD_DIR"):
        data["upload"] = {**(data.get("upload") or {}), "dir": os.environ["RESUME_CHECKER_UPLOAD_DIR"]}
    return data


def build_config(data: Dict[str, Any]) -> AppConfig:
    """Build ``AppConfig`` from an already merged raw mapping."""
    upload = data.get("upload") or {}
    evaluation = data.get("evaluation") or {}
    defaults = AppConfig()

    return AppConfig(
        api_key=str(data.get("api_key", "") or ""),
        provider=str(data.get("provider", defaults.provider) or defaults.provider),
        model=str(data.get("model", defaults.model) or defaults.model),
        api_base=str(data.get("api_base", "") or ""),
        temperature=data.get("temperature", defaults.temperature),
        max_tokens=data.get("max_tokens", defaults.max_tokens),
        port=int(data.get("port", defaults.port)),
        upload_dir=str(upload.get("dir", defaults.upload_dir)),
        max_upload_bytes=upload.get("max_bytes", defaults.max_upload_bytes),
        max_prompt_chars=evaluation.get("max_prompt_chars", defaults.max_prompt_chars),
        timeout_seconds=evaluation.get("timeout_seconds", defaults.timeout_seconds),
        max_attempts=evaluation.get("max_attempts", defaults.max_attempts),
        strict_schema=bool(evaluation.get("strict_schema", defaults.strict_schema)),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load and validate configuration from YAML plus environment overrides.

    Raises:
        ConfigurationError: if any configuration error is found.
    """
    data = apply_env_overrides(load_raw_config(config_path))
    ensure_valid_config(data)
    return build_config(data)
