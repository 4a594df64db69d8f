from slowapi import Limiter
from slowapi.util import get_remote_address

from orders_api.config import get_settings

settings = get_settings()

# Limits are applied per endpoint: DEFAULT_RATE_LIMIT on reads, WRITE_RATE_LIMIT on writes
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)
