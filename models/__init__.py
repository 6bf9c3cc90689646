from .db import db
from .studio import Studio
from .pricing import PricingTier
from .addon import Addon
from .setting import Setting
from .booking import Booking, BookingAddon, BookingDayLock
from .audit_log import AuditLog
from .session import AdminSession
from .ip_rate_limit import IpRateLimit
