"""Scoring configuration and environment setup."""

import logging
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from po_analytics.utils.types import PriceScoringMode

type ConfigDict = dict[str, str | int | float | bool | list[str]]

logger = logging.getLogger(__name__)

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


@dataclass(frozen=True)
class ScoringConfig:
    price_scoring_mode: PriceScoringMode = PriceScoringMode.FLAT
    max_po_value_reference: float = 200_000_000.0
    placeholder_vendor_names: tuple[str, ...] = ("po not released",)
    top_n: int = 6


DEFAULT_CONFIG = ScoringConfig()


def get_tool_config(pyproject: Path = PYPROJECT) -> ConfigDict:
    """Read the ``[tool.po_analytics]`` table from pyproject.toml."""
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("po_analytics", {})


def _apply_overrides(config: ScoringConfig, overrides: ConfigDict) -> ScoringConfig:
    changes = {}
    for key, value in overrides.items():
        match key:
            case "price_scoring_mode":
                changes[key] = PriceScoringMode(value)
            case "max_po_value_reference":
                changes[key] = float(value)
            case "placeholder_vendor_names":
                changes[key] = tuple(str(v).strip().lower() for v in value)
            case "top_n":
                changes[key] = int(value)
            case unknown:
                logger.warning(f"Ignoring unknown po_analytics setting: {unknown}")
    return replace(config, **changes)


def load_scoring_config(
    env: str = "production",
    pyproject: Path = PYPROJECT,
) -> ScoringConfig:
    match env:
        case "production" | "staging":
            config = ScoringConfig()
        case "development":
            config = ScoringConfig(top_n=10)
        case "reference-ceiling":
            config = ScoringConfig(price_scoring_mode=PriceScoringMode.PROPORTIONAL)
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return _apply_overrides(config, get_tool_config(pyproject))
