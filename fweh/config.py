from __future__ import annotations

import yaml
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from .errors import InvalidParameterError
from .options import (
    ProcessingOptions,
    ShadowSpec,
    parse_background,
    parse_point,
    parse_ratio,
)


@dataclass
class ShadowConfig:
    """Drop-shadow settings as written in a config file."""

    enabled: bool = False
    offset: str = "25,25"  # "x,y" in pixels; positive values push the shadow right/down
    color: str = "black"
    radius: float = 25.0  # blur radius in pixels
    opacity: float = 1.0  # 0.0 - 1.0


@dataclass
class Config:
    """Top-level configuration; every field maps onto a CLI flag of the same name."""

    scale: float = 110.0  # canvas size as a percentage of the source image
    roundness: float = 0.0  # corner radius, percent of min(width, height)
    offset: str = "0,0"  # image offset from the centre of the canvas
    background: str = "colr:black"  # colr:<color> | grad:<c1-c2-...> | imag:<path>
    ratio: Optional[str] = None  # target aspect ratio "W:H"; None keeps the source's
    shadow: ShadowConfig = field(default_factory=ShadowConfig)

    def to_options(self) -> ProcessingOptions:
        """Parse the textual fields into validated :class:`ProcessingOptions`."""
        shadow = None
        if self.shadow.enabled:
            shadow = ShadowSpec(
                offset=parse_point(str(self.shadow.offset)),
                color=self.shadow.color,
                radius=_as_float("shadow.radius", self.shadow.radius),
                opacity=_as_float("shadow.opacity", self.shadow.opacity),
            )
        return ProcessingOptions(
            scale=_as_float("scale", self.scale),
            roundness=_as_float("roundness", self.roundness),
            offset=parse_point(str(self.offset)),
            shadow=shadow,
            background=parse_background(str(self.background)),
            ratio=parse_ratio(str(self.ratio)) if self.ratio else None,
        )


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from None


def load_config(path: Optional[Path]) -> Config:
    """Load configuration from a YAML file, returning defaults if *path* is None or missing."""
    if path is None or not path.exists():
        return Config()

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidParameterError(f"cannot parse config file {path}: {exc}") from exc

    if not isinstance(data, Mapping):
        raise InvalidParameterError(f"config file {path} must contain a mapping at the top level")
    return load_config_from_dict(data)


def load_config_from_dict(data: Mapping[str, Any]) -> Config:
    """Build a Config from a dict using the same schema as ``config.yaml``.

    Unknown keys are ignored.
    """
    shadow_data = data.get("shadow") or {}
    if not isinstance(shadow_data, Mapping):
        raise InvalidParameterError("'shadow' must be a mapping")

    shadow_fields = {
        k: v for k, v in shadow_data.items() if k in ShadowConfig.__dataclass_fields__
    }
    top_fields = {
        k: v
        for k, v in data.items()
        if k in Config.__dataclass_fields__ and k != "shadow"
    }
    return Config(shadow=ShadowConfig(**shadow_fields), **top_fields)


def apply_overrides(config: Config, overrides: Mapping[str, Any]) -> Config:
    """
    Return a new Config with the non-None entries of *overrides* applied.

    Keys prefixed with ``shadow_`` (e.g. ``shadow_radius``) target the shadow
    section.  Giving ``shadow_offset`` also switches the shadow on.
    """
    top = {}
    shadow = {}
    for key, value in overrides.items():
        if value is None:
            continue
        if key.startswith("shadow_"):
            shadow[key[len("shadow_"):]] = value
        else:
            top[key] = value

    known_shadow = {f.name for f in fields(ShadowConfig)}
    shadow = {k: v for k, v in shadow.items() if k in known_shadow}
    if "offset" in shadow:
        shadow.setdefault("enabled", True)

    known_top = {f.name for f in fields(Config)} - {"shadow"}
    top = {k: v for k, v in top.items() if k in known_top}
    return replace(config, shadow=replace(config.shadow, **shadow), **top)
