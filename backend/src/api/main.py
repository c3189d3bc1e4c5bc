"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.helpers import FLASH_ALERT_HEADER, redirect_to
from api.routers import folders, health, tokens
from core.config import get_settings
from services.exceptions import AuthenticationRequiredError

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Folders API",
    description="Folders of bookmarked search results, private or shared publicly.",
    version="0.1.0",
)


@app.exception_handler(AuthenticationRequiredError)
async def authentication_required_handler(
    request: Request, _exc: AuthenticationRequiredError,
) -> Response:
    """Send anonymous callers to the sign-in location."""
    logger.info(
        "authentication_required method=%s path=%s", request.method, request.url.path,
    )
    return redirect_to(get_settings().login_url)


app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", FLASH_ALERT_HEADER],
)

app.include_router(health.router)
app.include_router(folders.router)
app.include_router(tokens.router)
