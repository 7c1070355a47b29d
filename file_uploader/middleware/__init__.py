"""HTTP middleware: upload size limit and request ID.

Applied in file_uploader.main; order matters (last added = outermost).
"""

from file_uploader.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from file_uploader.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDLogFilter",
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
