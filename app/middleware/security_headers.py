"""Security headers middleware.

The account pages are plain HTML forms with inline styles posting back to this
origin, so the CSP allows exactly that and nothing else. HSTS is only sent when
the deployment is served over https (production).
Raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

PAGE_CSP = (
    "default-src 'self'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data:; "
    "form-action 'self'; "
    "frame-ancestors 'none'; "
    "base-uri 'none'"
)
HSTS_VALUE = "max-age=31536000; includeSubDomains"
# Interactive API docs load their UI from a CDN; these paths get no CSP.
DOCS_PATHS = ("/docs", "/redoc")


def build_security_headers(hsts: bool) -> dict[str, str]:
    """Headers added to every response; HSTS only when hsts is True."""
    headers = {
        "Content-Security-Policy": PAGE_CSP,
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "same-origin",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    }
    if hsts:
        headers["Strict-Transport-Security"] = HSTS_VALUE
    return headers


def SecurityHeadersMiddleware(app: Callable, hsts: bool = False) -> Callable:
    """Set security headers on HTTP responses unless the route already set them."""
    header_list = [(k.lower().encode(), v.encode()) for k, v in build_security_headers(hsts).items()]
    docs_header_list = [h for h in header_list if h[0] != b"content-security-policy"]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        extra = docs_header_list if scope.get("path", "").startswith(DOCS_PATHS) else header_list

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                headers.extend(h for h in extra if h[0] not in seen)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
