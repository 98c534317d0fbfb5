"""
Pixel stages of the framing pipeline.
"""
from __future__ import annotations

from .background import make_background
from .compositor import overlay
from .corners import CornerRadii, apply_corner_radii, round_corners
from .shadow import ShadowLayer, build_alpha_mask, make_shadow

__all__ = [
    "CornerRadii",
    "ShadowLayer",
    "apply_corner_radii",
    "build_alpha_mask",
    "make_background",
    "make_shadow",
    "overlay",
    "round_corners",
]
