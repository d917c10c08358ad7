"""Stack profile registry."""

from .loader import load_registry
from .models import StackProfile, StackRegistry

__all__ = ["StackProfile", "StackRegistry", "load_registry"]
