"""
Generator Configuration

This module loads configuration from the shared YAML files.
It serves as the SINGLE SOURCE OF TRUTH for all business constants in Python.

WARNING: DO NOT hardcode tier sizes, weights or source URLs in other files.
Always import from here.

Usage:
    from stryktips.config.generator_config import get_config

    full_hedges = get_config().tiers.full_hedge
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

CONFIG_DIR_ENV = "STRYKTIPS_CONFIG_DIR"
CONFIG_FILENAME = "generator-config.yaml"
TEAM_NAMES_FILENAME = "team-names.yaml"


def _config_dir() -> Path:
    """Locate the shared-config/ directory (env override first)."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "shared-config"


def _load_yaml(filename: str) -> Dict[str, Any]:
    yaml_path = _config_dir() / filename

    if not yaml_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {yaml_path}\n"
            f"Run from the project root or set {CONFIG_DIR_ENV}."
        )

    with open(yaml_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _load_yaml_config() -> Dict[str, Any]:
    """Load configuration from shared YAML file."""
    return _load_yaml(CONFIG_FILENAME)


@dataclass(frozen=True)
class DrawConfig:
    """Draw shape: number of matches per coupon."""
    match_count: int  # 13
    description_separator: str  # " - "


@dataclass(frozen=True)
class TierSizes:
    """Hedging tier sizes by rank position."""
    full_hedge: int  # 4
    partial_hedge: int  # 4
    pinned: int  # 5

    @property
    def total(self) -> int:
        return self.full_hedge + self.partial_hedge + self.pinned


@dataclass(frozen=True)
class ScoreWeights:
    """Uncertainty score blend."""
    market_weight: float  # 0.7
    form_weight: float  # 0.3


@dataclass(frozen=True)
class FormConfig:
    """Recent form scoring rule."""
    window: int
    win_points: int
    draw_points: int
    loss_points: int


@dataclass(frozen=True)
class SourcesConfig:
    """External data providers."""
    draws_url: str
    sportsdb_base_url: str
    sportsdb_api_key: str
    request_timeout_seconds: float
    lookup_workers: int


@dataclass(frozen=True)
class GeneratorConfig:
    """Complete generator configuration."""
    version: str
    last_updated: str
    draw: DrawConfig
    tiers: TierSizes
    weights: ScoreWeights
    form: FormConfig
    sources: SourcesConfig


def _build_config(raw_config: Dict[str, Any]) -> GeneratorConfig:
    """Build typed configuration from raw YAML dict."""
    return GeneratorConfig(
        version=str(raw_config['version']),
        last_updated=str(raw_config['last_updated']),
        draw=DrawConfig(
            match_count=raw_config['draw']['match_count'],
            description_separator=raw_config['draw']['description_separator']
        ),
        tiers=TierSizes(
            full_hedge=raw_config['tiers']['full_hedge'],
            partial_hedge=raw_config['tiers']['partial_hedge'],
            pinned=raw_config['tiers']['pinned']
        ),
        weights=ScoreWeights(
            market_weight=float(raw_config['weights']['market_weight']),
            form_weight=float(raw_config['weights']['form_weight'])
        ),
        form=FormConfig(
            window=raw_config['form']['window'],
            win_points=raw_config['form']['win_points'],
            draw_points=raw_config['form']['draw_points'],
            loss_points=raw_config['form']['loss_points']
        ),
        sources=SourcesConfig(
            draws_url=raw_config['sources']['draws_url'],
            sportsdb_base_url=raw_config['sources']['sportsdb_base_url'].rstrip('/'),
            sportsdb_api_key=str(raw_config['sources']['sportsdb_api_key']),
            request_timeout_seconds=float(raw_config['sources']['request_timeout_seconds']),
            lookup_workers=raw_config['sources']['lookup_workers']
        )
    )


# =============================================================================
# GLOBAL CONFIGURATION INSTANCE
# =============================================================================

# Load configuration at module import time
# This ensures any YAML syntax errors are caught immediately
_raw_config = _load_yaml_config()
GENERATOR_CONFIG: GeneratorConfig = _build_config(_raw_config)


def get_config() -> GeneratorConfig:
    """
    Current configuration instance.

    Consumers call this when they are constructed so a reload_config()
    applies to every component built afterwards.
    """
    return GENERATOR_CONFIG


def get_setting(path: str) -> Union[float, int, str, bool, Dict]:
    """
    Get a setting value by dot-notation path.

    Args:
        path: Dot-notation path (e.g., 'tiers.full_hedge')

    Returns:
        The setting value

    Example:
        >>> get_setting('weights.market_weight')
        0.7
    """
    keys = path.split('.')
    value: Any = get_config()

    for key in keys:
        if isinstance(value, dict):
            value = value[key]
        else:
            value = getattr(value, key)

    return value


def reload_config() -> GeneratorConfig:
    """
    Reload configuration from YAML file.

    The new configuration is installed only if it validates; otherwise the
    previous one stays in place and ValueError is raised.

    Returns:
        Updated GeneratorConfig instance
    """
    global GENERATOR_CONFIG
    candidate = _build_config(_load_yaml_config())
    validate_config(candidate)
    GENERATOR_CONFIG = candidate
    return GENERATOR_CONFIG


def load_team_name_mapping() -> Dict[str, str]:
    """
    Load the display-name -> search-name table used for team lookups.

    Returns:
        Mapping of abbreviated coupon names to canonical search names
    """
    raw = _load_yaml(TEAM_NAMES_FILENAME)
    teams = raw.get('teams') or {}
    return {str(short): str(full) for short, full in teams.items()}


# =============================================================================
# VALIDATION
# =============================================================================

def validate_config(config: Optional[GeneratorConfig] = None) -> None:
    """
    Validate that all required settings are present and coherent.

    Args:
        config: Configuration to check (defaults to the installed one)

    Raises:
        ValueError: If any setting is invalid
    """
    config = config or GENERATOR_CONFIG
    errors = []

    if config.draw.match_count < 1:
        errors.append("draw.match_count must be at least 1")

    if not config.draw.description_separator.strip():
        errors.append("draw.description_separator must not be blank")

    for tier_name in ['full_hedge', 'partial_hedge', 'pinned']:
        if getattr(config.tiers, tier_name) < 0:
            errors.append(f"tiers.{tier_name} must be non-negative")

    if config.tiers.total != config.draw.match_count:
        errors.append(
            f"tiers must sum to draw.match_count "
            f"({config.tiers.total} != {config.draw.match_count})"
        )

    if config.weights.market_weight < 0 or config.weights.form_weight < 0:
        errors.append("weights must be non-negative")

    if config.form.window < 1:
        errors.append("form.window must be at least 1")

    if config.sources.request_timeout_seconds <= 0:
        errors.append("sources.request_timeout_seconds must be positive")

    if config.sources.lookup_workers < 1:
        errors.append("sources.lookup_workers must be at least 1")

    if errors:
        raise ValueError("Configuration validation failed:\n" + "\n".join(errors))


# Validate on import
validate_config()
