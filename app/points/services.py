"""
Application layer - writes and aggregates the points ledger.
"""

import logging

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from .models import PointsLedger

logger = logging.getLogger(__name__)


def settle_month_for(dt=None) -> str:
    """Returns the settlement month ('YYYY-MM') a timestamp falls into."""
    dt = timezone.localtime(dt) if dt else timezone.localtime()
    return f"{dt.year}-{dt.month:02d}"


@transaction.atomic
def award_points(
    *,
    user,
    site,
    amount: int,
    reason_code: str,
    post=None,
    admin=None,
    reason_text: str = "",
) -> PointsLedger:
    """Appends a ledger row for the current settlement month."""
    now = timezone.now()
    entry = PointsLedger.objects.create(
        user=user,
        site=site,
        post=post,
        amount=amount,
        reason_code=reason_code,
        reason_text=reason_text,
        admin=admin,
        settle_month=settle_month_for(now),
        occurred_at=now,
    )
    logger.info(
        "Awarded %d points to user %s at site %s (%s)",
        amount,
        user.pk,
        site.pk,
        reason_code,
    )
    return entry


def get_balance(*, user, site, settle_month=None) -> int:
    """Sums the user's ledger at a site, optionally for a single month."""
    entries = PointsLedger.objects.filter(user=user, site=site)
    if settle_month:
        entries = entries.filter(settle_month=settle_month)
    return entries.aggregate(total=Sum("amount"))["total"] or 0
