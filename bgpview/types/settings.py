from __future__ import annotations

import os

from pydantic import BaseModel, Field

from bgpview.utils.http import _user_agent


DEFAULT_BASE_URL = "https://api.bgpview.io"


class Settings(BaseModel):
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float = Field(default=5.0, gt=0)
    user_agent: str = Field(default_factory=_user_agent)

    @classmethod
    def from_env(cls) -> "Settings":
        values = {}
        base_url = os.getenv("BGPVIEW_BASE_URL", "").strip()
        if base_url:
            values["base_url"] = base_url
        timeout = os.getenv("BGPVIEW_TIMEOUT", "").strip()
        if timeout:
            values["timeout_seconds"] = timeout
        return cls(**values)
