"""Application configuration loaded from YAML."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config/config.local.yaml"


@dataclass
class AppConfig:
    """Configuration for the chat proxy and the editor sessions."""

    api_key: str = ""
    provider: str = "openai"
    model: str = "gpt-4o"
    max_tokens: int = 2000
    temperature: float = 0.7
    api_base: str = ""  # Custom API endpoint (proxy)
    free_ai_uses: int = 3
    proxy_url: str = ""  # Remote /api/chat endpoint; empty means call the provider in-process


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load raw configuration dictionary from YAML file.

    Priority order:
    1. config.local.yaml (user's local config with secrets)
    2. config.yaml (template/defaults)
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

    def _deep_merge(base: dict, override: dict) -> dict:
        merged = dict(base)
        for key, value in override.items():
            base_value = merged.get(key)
            if isinstance(base_value, dict) and isinstance(value, dict):
                merged[key] = _deep_merge(base_value, value)
            else:
                merged[key] = value
        return merged

    target = _resolve(config_path)

    # Default behavior: load config.yaml first, then overlay config.local.yaml.
    if Path(config_path).name == "config.local.yaml":
        base = _load_yaml(_resolve("config/config.yaml"))
        merged = _deep_merge(base, _load_yaml(target))
        if not merged:
            raise FileNotFoundError(f"Config file not found: {config_path} (also missing fallback config/config.yaml)")
        return merged

    data = _load_yaml(target)
    if not data:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return data


def config_from_dict(data: dict) -> AppConfig:
    """Build :class:`AppConfig` from a raw mapping, honoring env overrides."""
    return AppConfig(
        api_key=data.get("api_key", ""),
        provider=os.getenv("RESUME_COPILOT_PROVIDER") or data.get("provider", "openai"),
        model=os.getenv("RESUME_COPILOT_MODEL") or data.get("model", "gpt-4o"),
        max_tokens=data.get("max_tokens", 2000),
        temperature=data.get("temperature", 0.7),
        api_base=data.get("api_base", ""),
        free_ai_uses=data.get("free_ai_uses", 3),
        proxy_url=os.getenv("RESUME_COPILOT_PROXY_URL") or data.get("proxy_url", ""),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load application configuration from YAML file."""
    return config_from_dict(load_raw_config(config_path))
