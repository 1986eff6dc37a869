"""Domain services."""

from .base import Service
from .invite_service import InviteChange, InviteService
from .jwt_service import JWTService
from .notification_service import EmailSender, EmailTemplate, NotificationService
from .rate_limiter import RateLimitDecision, RateLimiter

__all__ = [
    "EmailSender",
    "EmailTemplate",
    "InviteChange",
    "InviteService",
    "JWTService",
    "NotificationService",
    "RateLimitDecision",
    "RateLimiter",
    "Service",
]
