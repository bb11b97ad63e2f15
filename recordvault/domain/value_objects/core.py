"""Domain value objects for the recordvault application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

_HEX = frozenset("0123456789abcdef")
_SHA256_HEX_LENGTH = 64


@dataclass(frozen=True)
class Digest:
    """Value object for a content digest.

    Must be a SHA-256 hex string (64 chars); normalized to lowercase.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate length and hex characters.

        Raises:
            ValueError: If empty, wrong length, or non-hex.
        """
        object.__setattr__(self, "value", self.value.lower())
        if not self.value:
            raise ValueError("Digest must be a non-empty string")
        if len(self.value) != _SHA256_HEX_LENGTH:
            raise ValueError("Digest must be a SHA-256 (64 chars) hex string")
        if not all(c in _HEX for c in self.value):
            raise ValueError("Digest must contain only hexadecimal characters")

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        """Return whether value would construct a Digest."""
        if not isinstance(value, str):
            return False
        try:
            cls(value)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        return self.value
