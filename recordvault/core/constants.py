"""Core constants: legally mandated values and shared literals.

These are not settings. Changing the digest algorithm or the retention
period is a data migration, not a configuration switch.
"""

# Lei 13.787/2018: records are kept for 20 years after the last activity.
RETENTION_YEARS = 20

# Pinned digest algorithm for content addressing (64 lowercase hex chars).
DIGEST_ALGORITHM = "sha256"
DIGEST_HEX_LENGTH = 64

# Chunk size for streaming hashes and blob IO.
CHUNK_SIZE = 64 * 1024

# Storage namespace for record documents: records/<record_id>/<stored_filename>
RECORDS_NAMESPACE = "records"

# MIME types eligible for OCR enrichment after upload.
OCR_MIME_TYPES = frozenset({
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/tiff",
    "image/bmp",
})
