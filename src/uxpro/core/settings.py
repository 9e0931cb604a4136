"""Runtime settings helpers for uxpro."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .error_handling import ConfigurationError

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.yaml"
_PACKAGED_DATA_DIR = _PACKAGE_ROOT / "data"


@dataclass(frozen=True)
class RankingConfig:
    """Heuristic thresholds and boost factors of the ranking pipeline.

    All cut points live here so they can be tuned from YAML without touching
    the search code. The relative ordering of the search-all thresholds
    (``high_confidence`` > ``multi_domain`` > ``low_confidence`` >
    ``domain_floor``) is what the strategy selection relies on.
    """

    # search_all strategy selection
    high_confidence: float = 0.7
    multi_domain: float = 0.5
    low_confidence: float = 0.3
    high_confidence_share: float = 0.8
    low_confidence_base_share: float = 0.5
    low_confidence_share_per_confidence: float = 0.3
    candidate_multiplier: int = 3

    # classifiers
    domain_floor: float = 0.2
    stack_floor: float = 0.3
    domain_multi_match_step: float = 0.03
    domain_multi_match_cap: float = 0.1
    platform_multi_match_step: float = 0.05
    platform_multi_match_cap: float = 0.15
    platform_default_confidence: float = 0.3

    # platform-aware boosting
    platform_match_boost: float = 1.5
    platform_mismatch_penalty: float = 0.5
    cross_platform_both_boost: float = 1.5
    cross_platform_mobile_boost: float = 1.2
    cross_platform_web_boost: float = 1.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "RankingConfig":
        """Build a config from a ``ranking:`` YAML section, rejecting unknown keys."""
        if not data:
            return cls()
        known = {f.name: f.type for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(
                f"Unknown ranking settings: {', '.join(unknown)}"
            )
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"Ranking setting '{key}' must be a number")
            values[key] = int(value) if key == "candidate_multiplier" else float(value)
        return cls(**values)


DEFAULT_RANKING = RankingConfig()


def get_project_root(override: Optional[str] = None) -> Path:
    """Return the project root used to resolve relative paths."""
    if override:
        return Path(override).expanduser().resolve()
    env_root = os.environ.get("UXPRO_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd().resolve()


def get_data_dir(override: Optional[str] = None, config: Optional[Mapping[str, Any]] = None) -> Path:
    """Return the directory holding the design CSV files.

    Precedence: explicit override, ``UXPRO_DATA_DIR``, ``data_dir`` from the
    configuration, then the seed dataset packaged with the library.
    """
    candidate = override or os.environ.get("UXPRO_DATA_DIR")
    if not candidate and config:
        candidate = config.get("data_dir")
    if not candidate:
        return _PACKAGED_DATA_DIR
    path = Path(candidate).expanduser()
    if path.is_absolute():
        return path
    return get_project_root() / path


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Return configuration data from ``config_path`` or the packaged default."""
    path = Path(config_path) if config_path else _DEFAULT_CONFIG
    if not path.exists():
        if config_path:
            raise ConfigurationError(f"Configuration file not found: {path}")
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root in {path} must be a mapping")
    return data


def get_ranking_config(config: Optional[Mapping[str, Any]] = None) -> RankingConfig:
    """Return the ranking tunables declared in ``config``."""
    if config is None:
        config = load_config()
    return RankingConfig.from_mapping(config.get("ranking"))
