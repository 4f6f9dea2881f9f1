"""Image rendition generation."""

from .algo.fit import FitMode
from .service import ImageRenditionService

__all__ = ["ImageRenditionService", "FitMode"]
