from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline' fonts.googleapis.com; "
    "font-src 'self' fonts.gstatic.com; img-src 'self' data: https:; "
    "connect-src 'self'"
)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
}

ACCESSIBILITY_HEADERS = {
    "X-Accessibility-Compliant": "WCAG-2.2-AA",
    "X-Screen-Reader-Optimized": "true",
    "X-Keyboard-Navigation": "enabled",
    "X-High-Contrast-Support": "available",
    "X-Reduced-Motion-Support": "available",
}


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the security and accessibility headers to every response."""

    def __init__(self, app, accessibility_path: str = "/api/v1/accessibility"):
        super().__init__(app)
        self.accessibility_path = accessibility_path

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        response.headers.update(ACCESSIBILITY_HEADERS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        if request.url.path == self.accessibility_path:
            response.headers["Cache-Control"] = "public, max-age=3600"
        return response
