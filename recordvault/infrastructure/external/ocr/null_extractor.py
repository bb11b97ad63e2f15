"""Default text extractor used when no OCR engine is wired in."""

import logging

logger = logging.getLogger(__name__)


class NullTextExtractor:
    """Implements ITextExtractor by recognizing nothing.

    Documents still get ocr_processed set, so enrichment does not run for them again.
    """

    async def extract_text(self, content: bytes, mime_type: str) -> str | None:
        logger.debug("No OCR engine configured; skipping %s (%d bytes)", mime_type, len(content))
        return None
