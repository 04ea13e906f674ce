# Settings modules
from .app_settings import AppSettings, get_app_settings
from .fee_settings import FeeSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "FeeSettings",
]
