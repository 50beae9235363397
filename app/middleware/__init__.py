"""HTTP middleware: request ID and security headers.

Applied in main app; the last one added runs outermost.
"""

from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "request_id_var",
]
