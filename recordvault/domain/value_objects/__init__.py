"""Domain value objects and shared value types."""

from recordvault.domain.value_objects.core import Digest

__all__ = ["Digest"]
