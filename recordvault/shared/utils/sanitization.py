"""Input sanitization utilities for free text and client-supplied filenames."""

import os
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs before they are persisted.

    Parameterized queries remain the primary defense against injection;
    these helpers strip markup from free text and make filenames safe to
    display and to derive storage names from.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    # Windows device names; rejected regardless of extension or case.
    RESERVED_FILENAMES: ClassVar[frozenset[str]] = frozenset(
        {"CON", "PRN", "AUX", "NUL"}
        | {f"COM{i}" for i in range(1, 10)}
        | {f"LPT{i}" for i in range(1, 10)}
    )
    CONTROL_CHARS: ClassVar[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")
    MAX_FILENAME_LENGTH: ClassVar[int] = 255

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        return nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})

    @classmethod
    def sanitize_filename(cls, filename: str) -> str:
        """Reduce a client filename to a safe basename.

        Strips directory components (either separator), control characters
        and surrounding dots or spaces.

        Raises:
            ValueError: If nothing usable is left or the stem is a reserved
                device name.
        """
        name = filename.replace("\\", "/")
        name = os.path.basename(name)
        name = cls.CONTROL_CHARS.sub("", name)
        name = name.strip(". ")
        if not name:
            raise ValueError("Filename is empty or invalid after sanitization")
        stem = name.split(".", 1)[0].strip().upper()
        if stem in cls.RESERVED_FILENAMES:
            raise ValueError(f"Reserved filename: {name}")
        if len(name) > cls.MAX_FILENAME_LENGTH:
            root, ext = os.path.splitext(name)
            name = root[: cls.MAX_FILENAME_LENGTH - len(ext)] + ext
        return name


def sanitize_text(value: str | None) -> str | None:
    """Strip markup and surrounding whitespace from free text; empty becomes None."""
    if value is None:
        return None
    cleaned = InputSanitizer.sanitize_html(value).strip()
    return cleaned or None


def sanitize_filename(filename: str) -> str:
    """Sanitize a client filename; raises ValueError if unusable."""
    return InputSanitizer.sanitize_filename(filename)
