"""metascan — Scoring configuration (weight, bonus and threshold tables).

The engine never reads module state: callers pass a ValidationConfig explicitly,
defaulting to DEFAULT_CONFIG. Overrides produce a new instance.

Point scale (canonical):
  - Rule weights are small integers, 1 (weak) to 5 (very strong)
  - Co-occurrence bonuses add 2 to 5
  - Thresholds: <=3 low, <=7 moderate, <=12 high, >12 very high
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from metascan.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class WeightTable(BaseModel):
    """Points awarded when a rule is detected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    make_absent: int = Field(1, ge=0)
    model_absent: int = Field(1, ge=0)
    date_absent: int = Field(2, ge=0)
    editor_software: int = Field(4, ge=0)
    silent_edit: int = Field(1, ge=0, description="Per silent-edit signal")
    ai_provenance: int = Field(5, ge=0)
    progressive_encoding: int = Field(3, ge=0)
    chroma_subsampling: int = Field(3, ge=0)
    icc_profile: int = Field(3, ge=0, description="HP/Adobe vendor profile")
    icc_profile_nonstandard: int = Field(2, ge=0)
    icc_profile_absent: int = Field(1, ge=0)
    dimension_mismatch: int = Field(2, ge=0)
    temporal_inconsistency: int = Field(3, ge=0)
    software_pattern: int = Field(2, ge=0)


class BonusTable(BaseModel):
    """Points awarded when a co-occurrence combination holds."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    progressive_subsampling: int = Field(2, ge=0)
    icc_editor: int = Field(2, ge=0)
    temporal_technical: int = Field(2, ge=0)
    date_present_ai: int = Field(4, ge=0)
    ai_technical: int = Field(5, ge=0)


class ThresholdTable(BaseModel):
    """Inclusive upper bounds of the first three risk levels."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    low_max: int = 3
    moderate_max: int = 7
    high_max: int = 12

    @model_validator(mode="after")
    def _ascending(self) -> ThresholdTable:
        if not self.low_max < self.moderate_max < self.high_max:
            raise ValueError("thresholds must be strictly ascending: low_max < moderate_max < high_max")
        return self


class ValidationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    weights: WeightTable = Field(default_factory=WeightTable)
    bonuses: BonusTable = Field(default_factory=BonusTable)
    thresholds: ThresholdTable = Field(default_factory=ThresholdTable)

    transport_cap: int = Field(7, ge=0, description="Max adjusted score when digital transport fires")
    transport_min_votes: int = Field(3, ge=3, le=4, description="Votes needed out of 4")
    temporal_max_gap_hours: float = Field(24.0, gt=0)
    silent_edit_max: int = Field(2, ge=0)
    display_ceiling: int = Field(50, gt=0)

    digital_transport_enabled: bool = True
    silent_edit_enabled: bool = False

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> ValidationConfig:
        """Return a new config with ``overrides`` deep-merged over this one."""
        if not overrides:
            return self
        merged = _deep_merge(self.model_dump(), overrides)
        try:
            return ValidationConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid scoring override: {exc}") from exc


DEFAULT_CONFIG = ValidationConfig()


def _deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def load_validation_config(path: str | Path | None, base: ValidationConfig = DEFAULT_CONFIG) -> ValidationConfig:
    """Load JSON overrides from ``path`` on top of ``base``.

    An empty path returns ``base`` unchanged.
    """
    if not path:
        return base
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read scoring config {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Scoring config {p} must contain a JSON object")
    logger.info("Loaded scoring overrides from %s (%d top-level keys)", p, len(data))
    return base.with_overrides(data)
