"""Action handler mixins for TesseraApp."""

from .navigation_actions import NavigationActionsMixin
from .source_actions import SourceActionsMixin

__all__ = [
    "NavigationActionsMixin",
    "SourceActionsMixin",
]
