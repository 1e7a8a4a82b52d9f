"""Configuration helpers for the anchor validation engine."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml


CONFIG_ENV_VAR = "ANCHOR_AUDIT_CONFIG"


class ConfigError(ValueError):
    """Raised when the engine configuration is unusable."""


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def weight(self, name: str) -> float:
        weights = self.raw.get("weights", {})
        return float(weights.get(name, 0.0))

    def snippet(self, name: str) -> float:
        snippet = self.raw.get("snippet", {})
        return float(snippet.get(name, DEFAULTS["snippet"][name]))

    def boilerplate_phrases(self) -> List[str]:
        return [str(phrase) for phrase in self.raw.get("boilerplate_phrases", []) if str(phrase).strip()]

    def validate(self) -> "EngineConfig":
        """Raise ConfigError when a policy value is out of range."""

        min_relevance = self.get("min_relevance")
        if not isinstance(min_relevance, (int, float)) or not 0.0 <= min_relevance <= 1.0:
            raise ConfigError(f"min_relevance must be within [0, 1], got {min_relevance!r}")

        for key in (
            "max_anchor_words",
            "min_sentence_length",
            "list_item_min_words",
            "list_window",
            "max_opportunities_per_page",
        ):
            value = self.get(key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{key} must be a positive integer, got {value!r}")

        weights = self.raw.get("weights", {})
        for name, value in weights.items():
            if not isinstance(value, (int, float)) or value < 0:
                raise ConfigError(f"weight {name!r} must be a non-negative number, got {value!r}")
        if sum(weights.values()) <= 0:
            raise ConfigError("at least one ranking weight must be positive")

        if self.snippet("min_length") <= 0 or self.snippet("max_length") < self.snippet("min_length"):
            raise ConfigError("snippet length band is invalid")
        if self.snippet("decay") <= 0:
            raise ConfigError("snippet decay must be positive")
        return self


DEFAULTS: Dict[str, Any] = {
    "max_opportunities_per_page": 5,
    "max_anchor_words": 8,
    "min_relevance": 0.8,
    "min_sentence_length": 20,
    "list_item_min_words": 15,
    "list_window": 20,
    "weights": {
        "relevance": 0.8,
        "snippet_quality": 0.2,
    },
    "snippet": {
        "min_length": 40,
        "max_length": 160,
        "decay": 200,
    },
    "boilerplate_phrases": [],
    "dom_skip_tags": ["h1", "h2", "h3", "h4", "h5", "h6", "a", "code", "pre", "nav", "footer"],
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        if not isinstance(user, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        merge_into(data, user)

    return EngineConfig(data).validate()


def default_config() -> EngineConfig:
    """Load the file named by ``ANCHOR_AUDIT_CONFIG``, or the defaults when unset."""

    return load_config(os.getenv(CONFIG_ENV_VAR) or None)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
