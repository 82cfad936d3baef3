"""Configuration helpers for the link ranking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def damping(self) -> float:
        return float(self.raw.get("damping", DEFAULTS["damping"]))

    @property
    def iterations(self) -> int:
        return int(self.raw.get("iterations", DEFAULTS["iterations"]))

    @property
    def rank_weight(self) -> float:
        return float(self.raw.get("rank_weight", DEFAULTS["rank_weight"]))

    @property
    def rank_file_name(self) -> str:
        return str(self.raw.get("rank_file_name", DEFAULTS["rank_file_name"]))

    @property
    def exclude_self_loops(self) -> bool:
        return self.raw.get("exclude_self_loops", DEFAULTS["exclude_self_loops"])

    @property
    def max_documents(self) -> int:
        return int(self.raw.get("max_documents", DEFAULTS["max_documents"]))

    def validate(self) -> "EngineConfig":
        """Raise ConfigurationError when a setting is out of range."""

        try:
            damping = self.damping
            iterations = self.iterations
            weight = self.rank_weight
            max_documents = self.max_documents
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid engine setting: {exc}") from exc

        if not 0.0 <= damping <= 1.0:
            raise ConfigurationError(f"damping must lie in [0, 1], got {damping}")
        if iterations < 0:
            raise ConfigurationError(f"iterations must be non-negative, got {iterations}")
        if weight < 0.0:
            raise ConfigurationError(f"rank_weight must be non-negative, got {weight}")
        if max_documents < 1:
            raise ConfigurationError(f"max_documents must be positive, got {max_documents}")
        if not isinstance(self.exclude_self_loops, bool):
            raise ConfigurationError(f"exclude_self_loops must be true or false, got {self.exclude_self_loops!r}")
        if not self.rank_file_name or "/" in self.rank_file_name:
            raise ConfigurationError(f"rank_file_name must be a bare file name, got {self.rank_file_name!r}")
        return self


DEFAULTS: Dict[str, Any] = {
    "damping": 0.15,
    "iterations": 50,
    "rank_weight": 0.0,
    "rank_file_name": "page_ranks.txt",
    "exclude_self_loops": True,
    "max_documents": 10000,
}


def load_config(path: str | Path | None = None, overrides: Dict[str, Any] | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = DEFAULTS.copy()

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        if not isinstance(user, dict):
            raise ConfigurationError(f"{path}: expected a mapping at the top level")
        merge_into(data, user)

    if overrides:
        merge_into(data, overrides)

    return EngineConfig(data).validate()


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
