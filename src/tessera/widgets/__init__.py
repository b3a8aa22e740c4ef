"""Tessera widgets."""

from .grid import ThumbnailGrid
from .query_modal import QueryModal
from .status_bar import StatusBar
from .viewer import ItemViewer

__all__ = [
    "ThumbnailGrid",
    "QueryModal",
    "StatusBar",
    "ItemViewer",
]
