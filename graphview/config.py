"""
Configuration
=============

Central registry of the attribute naming scheme and defaults shared by
graphic graphs and sprites.

Environment overrides:
    GRAPHVIEW_SPRITE_PREFIX   prefix of sprite mirror attributes ("ui.sprite")
    GRAPHVIEW_DEFAULT_UNITS   gu | px | percents
    GRAPHVIEW_LOG_LEVEL       DEBUG | INFO | WARNING | ...
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os

from .contracts.base import Units


@dataclass(frozen=True)
class ViewConfig:
    """Configuration for graphic graphs and their sprites."""
    sprite_prefix: str = "ui.sprite"
    position_attribute: str = "ui.position"
    default_units: Units = Units.GU
    log_level: str = "WARNING"

    def __post_init__(self):
        if not self.sprite_prefix:
            raise ValueError("sprite_prefix must be a non-empty string")

    def sprite_key(self, sprite_id: str) -> str:
        """Graph attribute mirroring the position of a sprite."""
        return f"{self.sprite_prefix}.{sprite_id}"

    def sprite_attribute_key(self, sprite_id: str, attribute: str) -> str:
        """Graph attribute mirroring one attribute of a sprite."""
        return f"{self.sprite_prefix}.{sprite_id}.{attribute}"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> ViewConfig:
        env = os.environ if environ is None else environ
        defaults = ViewConfig()

        units_name = env.get("GRAPHVIEW_DEFAULT_UNITS")
        units = defaults.default_units
        if units_name:
            try:
                units = Units(units_name.strip().lower())
            except ValueError:
                raise ValueError(
                    f"GRAPHVIEW_DEFAULT_UNITS must be one of "
                    f"{', '.join(u.value for u in Units)}, got {units_name!r}"
                ) from None

        return ViewConfig(
            sprite_prefix=env.get("GRAPHVIEW_SPRITE_PREFIX", defaults.sprite_prefix),
            default_units=units,
            log_level=env.get("GRAPHVIEW_LOG_LEVEL", defaults.log_level).upper(),
        )


DEFAULT_CONFIG = ViewConfig()
