"""Rate limiter shared by the upload route and app.main.

Keyed on the client address; ``RATE_LIMIT_ENABLED=false`` turns it off for
local bulk loads behind a trusted proxy.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
