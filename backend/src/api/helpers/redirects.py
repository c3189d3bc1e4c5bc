"""Redirect helpers shared by routes that answer with a location instead of a body."""
from fastapi import Request, status
from fastapi.responses import RedirectResponse

# Header carrying a one-off message for the page the client lands on next
FLASH_ALERT_HEADER = "X-Flash-Alert"


def redirect_to(url: str, alert: str | None = None) -> RedirectResponse:
    """
    Redirect with 303 See Other, so the client follows up with a GET.

    Args:
        url: Where to send the client.
        alert: Optional error message to surface after the redirect.
    """
    response = RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)
    if alert:
        response.headers[FLASH_ALERT_HEADER] = alert
    return response


def folder_location(request: Request, folder_id: int) -> str:
    """Canonical path of a folder, e.g. '/folders/42'."""
    return str(request.app.url_path_for("show_folder", folder_id=folder_id))


def referrer_or(request: Request, fallback: str) -> str:
    """The page the request came from, or `fallback` when no Referer was sent."""
    return request.headers.get("referer") or fallback
