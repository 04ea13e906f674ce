from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from nube_pnl.settings.modules.fee_settings import FeeSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    fees: FeeSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached settings for the entire app."""
    return AppSettings(fees=FeeSettings())
