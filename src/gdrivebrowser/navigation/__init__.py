"""Navigation exports for gdrivebrowser."""

from __future__ import annotations

from .location import ROOT, Location, LocationModel

__all__ = ["ROOT", "Location", "LocationModel"]
