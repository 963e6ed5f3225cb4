"""Tiered storage quota policy.

Every tier is gated by the same rule; tiers only differ in their ceiling.
Unpaid accounts are refused before any size check.
"""
from typing import NamedTuple, Optional

from .models import ServiceTier

TIER_CEILINGS = {
    ServiceTier.FREE: 10_000_000,
    ServiceTier.STANDARD: 40_000_000_000,
    ServiceTier.ENTERPRISE: 1_000_000_000_000,
}

UNPAID = "unpaid"
QUOTA_EXCEEDED = "quota exceeded"


class Decision(NamedTuple):
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(True)


def ceiling_for(service_tier) -> int:
    return TIER_CEILINGS[ServiceTier.coerce(service_tier)]


def decide(service_tier, current_usage_bytes: int, requested_file_size_bytes: int, is_paid: bool = True) -> Decision:
    if not is_paid:
        return Decision(False, UNPAID)

    ceiling = ceiling_for(service_tier)
    if current_usage_bytes >= ceiling or current_usage_bytes + requested_file_size_bytes > ceiling:
        return Decision(False, QUOTA_EXCEEDED)
    return ALLOW
