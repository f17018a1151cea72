"""Protocol definitions for dependency inversion.

Core modules depend on these protocols instead of importing the concrete
source adapters from the services layer.
"""

from __future__ import annotations

from .services import CatalogSource, PlannableItem, VideoSource

__all__ = ["CatalogSource", "PlannableItem", "VideoSource"]
