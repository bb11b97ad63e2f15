"""ID and value generators (e.g. CUID)."""

import os

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_stored_filename(original_filename: str) -> str:
    """Return a fresh storage name that keeps the original extension.

    The client-supplied name never reaches the filesystem; only its
    lowercased extension does.
    """
    _, ext = os.path.splitext(original_filename)
    return f"{generate_cuid()}{ext.lower()}"
