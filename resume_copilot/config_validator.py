"""Configuration validator for Resume Copilot startup checks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

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
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Provider ---
    provider = raw_config.get("provider", "openai")
    if not isinstance(provider, str) or not provider:
        errors.append(
            ConfigError(
                field="provider",
                message="provider must be a non-empty string",
                severity=Severity.ERROR,
            )
        )
        provider = "openai"
    provider = provider.lower()

    if provider not in PROVIDER_DEFAULTS:
        errors.append(
            ConfigError(
                field="provider",
                message=f"Unknown provider '{provider}'. Expected one of: {', '.join(PROVIDER_DEFAULTS.keys())}",
                severity=Severity.WARNING,
            )
        )

    # --- API Key ---
    # A remote proxy holds its own credential.
    if not raw_config.get("proxy_url"):
        env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "")
        if not _resolve_api_key_value(raw_config.get("api_key", ""), env_key):
            message = (
                f"{env_key} not set. Set the env var or add api_key to config/config.local.yaml"
                if env_key
                else "API key not set. Set the env var or add api_key to config/config.local.yaml"
            )
            errors.append(ConfigError(field="api_key", message=message, severity=Severity.ERROR))

    # --- Model ---
    model = raw_config.get("model", "gpt-4o")
    if not model or not isinstance(model, str):
        errors.append(
            ConfigError(
                field="model",
                message="model must be a non-empty string",
                severity=Severity.ERROR,
            )
        )

    # --- Temperature ---
    temperature = raw_config.get("temperature", 0.7)
    if not isinstance(temperature, (int, float)) or temperature < 0 or temperature > 2:
        errors.append(
            ConfigError(
                field="temperature",
                message=f"temperature must be a number between 0 and 2, got {temperature}",
                severity=Severity.ERROR,
            )
        )

    # --- Max tokens ---
    max_tokens = raw_config.get("max_tokens", 2000)
    if not isinstance(max_tokens, int) or max_tokens <= 0:
        errors.append(
            ConfigError(
                field="max_tokens",
                message=f"max_tokens must be a positive integer, got {max_tokens}",
                severity=Severity.ERROR,
            )
        )

    # --- Free AI uses ---
    free_uses = raw_config.get("free_ai_uses", 3)
    if not isinstance(free_uses, int) or isinstance(free_uses, bool) or free_uses < 0:
        errors.append(
            ConfigError(
                field="free_ai_uses",
                message=f"free_ai_uses must be a non-negative integer, got {free_uses}",
                severity=Severity.ERROR,
            )
        )

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    return any(issue.severity == Severity.ERROR for issue in issues)


def _resolve_api_key_value(config_api_key: str, env_key: str = "") -> str:
    if env_key:
        env_value = os.environ.get(env_key, "")
        if env_value:
            return env_value

    config_api_key = config_api_key or ""
    if config_api_key.startswith("${") and config_api_key.endswith("}"):
        return os.environ.get(config_api_key[2:-1], "")

    return config_api_key
