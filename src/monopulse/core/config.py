"""Configuration model and I/O for Bayliss tapering designs.

A pydantic model for the design inputs with YAML/JSON I/O. The sidelobe level
may be given in dB (``sidelobe_db``) or as a linear voltage ratio
(``sidelobe_ratio``), which is converted to dB on load.
"""

from __future__ import annotations

import json
import math
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError, InvalidArgumentError
from .logging import get_logger
from .sampling import check_term_count
from .types import ComplexArray, DifferenceAxis, FloatArray, PointLike
from .units import ratio_to_db

logger = get_logger(__name__)


class TaperConfig(BaseModel):
    """Bayliss tapering design configuration."""

    sidelobe_db: float = Field(description="Near-in sidelobe to main lobe voltage ratio in dB")
    n_terms: int = Field(default=17, description="Number of series terms N")
    aperture_radius: float | None = Field(
        default=None, description="Aperture radius (farthest point if omitted)"
    )
    difference_axis: DifferenceAxis = Field(
        default=DifferenceAxis.Y, description="Axis of odd symmetry of the difference pattern"
    )
    wavelength: float | None = Field(
        default=None, description="Wavelength, in the unit of aperture_radius"
    )

    @field_validator("sidelobe_db")
    @classmethod
    def validate_sidelobe(cls, v: float) -> float:
        """Sidelobe level must be a negative, finite number of dB."""
        if not v < 0 or math.isinf(v):
            raise ValueError(f"Sidelobe level must be negative and finite, got {v} dB")
        return v

    @field_validator("n_terms")
    @classmethod
    def validate_n_terms(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Number of terms must be at least 1, got {v}")
        return v

    @field_validator("aperture_radius", "wavelength")
    @classmethod
    def validate_positive(cls, v: float | None) -> float | None:
        if v is not None and not v > 0:
            raise ValueError(f"Length must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def check_edge_illumination(self) -> TaperConfig:
        """Warn when N exceeds 2a/lambda for a known aperture and wavelength."""
        if self.aperture_radius is not None and self.wavelength is not None:
            check_term_count(self.n_terms, self.aperture_radius, self.wavelength)
        return self


def _normalize(data: object) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

    data = dict(data)
    if "sidelobe_db" not in data and "sidelobe_ratio" in data:
        ratio = data.pop("sidelobe_ratio")
        try:
            data["sidelobe_db"] = ratio_to_db(ratio)
        except (TypeError, InvalidArgumentError) as e:
            raise ConfigError(f"Invalid sidelobe_ratio {ratio!r}") from e
    elif "sidelobe_ratio" in data:
        raise ConfigError("Specify only one of sidelobe_db and sidelobe_ratio")
    return data


def config_from_dict(data: object) -> TaperConfig:
    """Build a validated config from a plain mapping.

    Raises:
        ConfigError: If the mapping does not describe a valid design
    """
    data = _normalize(data)
    try:
        return TaperConfig(**data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def load_config(path: str | Path) -> TaperConfig:
    """Load configuration from YAML or JSON file.

    Args:
        path: Path to configuration file

    Returns:
        Validated TaperConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If config is malformed or invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        if path.suffix.lower() in [".yaml", ".yml"]:
            data = yaml.safe_load(content)
        elif path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse config {path}: {e}") from e

    config = config_from_dict(data)
    logger.info("Loaded tapering config", {"path": str(path), "sidelobe_db": config.sidelobe_db})
    return config


def save_config(config: TaperConfig, path: str | Path) -> None:
    """Save configuration to YAML or JSON file.

    Args:
        config: Configuration to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def round_trip_config(config: TaperConfig) -> TaperConfig:
    """Serialize a config to YAML and load it back."""
    data = config.model_dump(mode="json", exclude_none=True)
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return config_from_dict(yaml.safe_load(yaml_str))


def compute_from_config(
    config: TaperConfig, points: PointLike | None = None
) -> tuple[ComplexArray, ComplexArray, FloatArray]:
    """Design the tapering described by ``config`` and sample it at ``points``.

    Returns:
        Tuple (g, B, mu) as from :func:`monopulse.tapering.bayliss_tapering`
    """
    from ..tapering.bayliss import bayliss_tapering

    return bayliss_tapering(
        config.sidelobe_db,
        config.n_terms,
        points,
        config.aperture_radius,
        config.difference_axis,
    )


__all__ = [
    "TaperConfig",
    "config_from_dict",
    "load_config",
    "save_config",
    "round_trip_config",
    "compute_from_config",
]
