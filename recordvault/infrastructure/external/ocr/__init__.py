"""OCR engine adapters behind ITextExtractor."""

from recordvault.infrastructure.external.ocr.null_extractor import NullTextExtractor

__all__ = ["NullTextExtractor"]
