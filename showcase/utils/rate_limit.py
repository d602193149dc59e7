from slowapi import Limiter
from slowapi.util import get_remote_address

from showcase.config import get_settings

# Shared by app.state and the route decorators
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)
