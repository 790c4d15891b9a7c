from .api import ApiSettings
from .checkout import CheckoutSettings
from .database import DatabaseSettings
from .gateway import GatewaySettings
from .notifications import NotificationSettings
from .rate_limit import RateLimitSettings

__all__ = [
    "ApiSettings",
    "CheckoutSettings",
    "DatabaseSettings",
    "GatewaySettings",
    "NotificationSettings",
    "RateLimitSettings",
]
