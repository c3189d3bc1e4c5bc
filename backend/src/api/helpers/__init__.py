"""API helper utilities."""
from api.helpers.redirects import FLASH_ALERT_HEADER, folder_location, redirect_to, referrer_or

__all__ = [
    "FLASH_ALERT_HEADER",
    "folder_location",
    "redirect_to",
    "referrer_or",
]
