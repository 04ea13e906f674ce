# Settings package
from nube_pnl.settings.modules import AppSettings, FeeSettings, get_app_settings

__all__ = ["get_app_settings", "AppSettings", "FeeSettings"]
