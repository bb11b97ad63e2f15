"""HTTP middleware: request size limit and request ID.

Applied in main app; order matters (last added = outermost).
"""

from recordvault.middleware.request_id import RequestIDMiddleware
from recordvault.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
