"""Loader settings and YAML configuration handling."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default_config.yaml"


def default_n_jobs() -> int:
    max_workers = os.cpu_count() or 2
    return max(1, max_workers - 1)


@dataclass(frozen=True)
class LoaderConfig:
    """How raw rows are split and which token marks a missing value."""

    delimiter: str = ","
    missing_token: str = "?"
    strip_whitespace: bool = True
    encoding: str = "utf-8"
    n_jobs: int = 1
    shard_min_rows: int = 10_000

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter must be a non-empty string.")
        if not self.missing_token:
            raise ValueError("missing_token must be a non-empty string.")
        if self.delimiter in self.missing_token:
            raise ValueError("missing_token must not contain the delimiter.")
        if self.n_jobs < 1 and self.n_jobs != -1:
            raise ValueError(f"n_jobs must be >= 1 or -1, got {self.n_jobs}.")
        if self.shard_min_rows < 1:
            raise ValueError(f"shard_min_rows must be >= 1, got {self.shard_min_rows}.")

    @property
    def effective_n_jobs(self) -> int:
        return default_n_jobs() if self.n_jobs == -1 else self.n_jobs

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "LoaderConfig":
        values = dict(values or {})
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown loader settings: {sorted(unknown)}")
        return cls(**values)


def _deep_update(base: Dict, updates: Dict) -> Dict:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[Path] = None) -> Dict:
    """Read the packaged defaults, overlaid with the YAML file at ``path`` if given."""

    with DEFAULT_CONFIG_PATH.open("r", encoding="utf-8") as fh:
        config = yaml.safe_load(fh)
    if path:
        with Path(path).open("r", encoding="utf-8") as fh:
            user_config = yaml.safe_load(fh)
        config = _deep_update(copy.deepcopy(config), user_config or {})
    return config


def loader_config_from(config: Mapping[str, Any]) -> LoaderConfig:
    return LoaderConfig.from_dict(config.get("loader"))
