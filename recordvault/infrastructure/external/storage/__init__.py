"""Storage: local filesystem backend behind IStorageService.

Content files live under <storage_root>/<storage_ref> with a .meta.json
sidecar; refs are relative paths such as records/<record_id>/<file>.
"""

from recordvault.infrastructure.external.storage.factory import StorageFactory
from recordvault.infrastructure.external.storage.local_storage import (
    LocalStorageService,
)

__all__ = [
    "LocalStorageService",
    "StorageFactory",
]
