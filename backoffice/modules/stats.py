"""
Dashboard statistics: pure reducers over in-memory entity lists.
Recomputed on every request, nothing is cached or maintained incrementally.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable

from backoffice.models.contact import Contact
from backoffice.models.development import DEVELOPMENT_TYPE_LABELS, Development, DevelopmentUnit, UnitStatus
from backoffice.models.quota import DevelopmentQuota, QuotaStatus

Key = str | Callable[[Any], Any]


def _get(item: Any, key: Key) -> Any:
    value = key(item) if callable(key) else getattr(item, key, None)
    if isinstance(value, Enum):
        return value.value
    return value


def _aware(value: datetime) -> datetime:
    # naive timestamps from the backend are UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _number(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def count_by(items: Iterable, key: Key) -> dict[Any, int]:
    counts: dict[Any, int] = {}
    for item in items:
        value = _get(item, key)
        counts[value] = counts.get(value, 0) + 1
    return counts


def percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100


def sum_field(items: Iterable, key: Key) -> Decimal:
    """Missing or None values count as zero."""
    return sum((_number(_get(item, key)) for item in items), Decimal("0"))


def recent_activity(
    items: Iterable,
    now: datetime | None = None,
    days: int = 7,
    key: Key = "created_at",
) -> int:
    since = _aware(now or datetime.now(timezone.utc)) - timedelta(days=days)
    return sum(
        1 for item in items
        if _get(item, key) is not None and _aware(_get(item, key)) > since
    )


def top_performers(items: Iterable, key: Key = "views", limit: int = 3) -> list:
    """Descending by `key`; sorted() is stable so ties keep input order."""
    return sorted(items, key=lambda item: _get(item, key) or 0, reverse=True)[:limit]


def development_stats(developments: list[Development], now: datetime | None = None, days: int = 7) -> dict:
    total = len(developments)
    # statuses are compared case-insensitively for developments
    statuses = count_by(developments, lambda d: (_get(d, "status") or "").lower())
    total_value = sum_field(developments, "price")

    return {
        "total_developments": total,
        "available_developments": statuses.get("available", 0),
        "sold_developments": statuses.get("sold", 0),
        "reserved_developments": statuses.get("reserved", 0),
        "total_value": total_value,
        "average_price": total_value / total if total else Decimal("0"),
        "total_views": int(sum_field(developments, "views")),
        "total_favorites": int(sum_field(developments, "favorites_count")),
        "recent_activity": recent_activity(developments, now=now, days=days),
    }


def development_type_stats(developments: list[Development]) -> list[dict]:
    total = len(developments)
    by_type: dict[str, list[Development]] = {}
    for d in developments:
        by_type.setdefault(_get(d, "type"), []).append(d)

    return [
        {
            "type": DEVELOPMENT_TYPE_LABELS.get(dev_type, dev_type),
            "count": len(members),
            "percentage": percentage(len(members), total),
            "average_price": sum_field(members, "price") / len(members),
        }
        for dev_type, members in by_type.items()
    ]


def unit_stats(units: list[DevelopmentUnit]) -> dict:
    statuses = count_by(units, "status")
    return {
        "total_units": len(units),
        "by_status": {s.value: statuses.get(s.value, 0) for s in UnitStatus},
        "by_type": count_by(units, "type"),
        "total_value": sum_field(units, "price"),
        "available_value": sum_field(
            [u for u in units if u.status == UnitStatus.AVAILABLE], "price",
        ),
        "sold_percentage": percentage(statuses.get(UnitStatus.SOLD.value, 0), len(units)),
    }


def quota_stats(quotas: list[DevelopmentQuota]) -> dict:
    statuses = count_by(quotas, "status")
    total_amount = sum_field(quotas, "amount")
    paid_amount = sum_field(quotas, "paid_amount")
    return {
        "total_quotas": len(quotas),
        "by_status": {s.value: statuses.get(s.value, 0) for s in QuotaStatus},
        "total_amount": total_amount,
        "paid_amount": paid_amount,
        "pending_amount": sum((q.pending_amount for q in quotas), Decimal("0")),
        "collection_percentage": float(paid_amount / total_amount * 100) if total_amount else 0.0,
    }


def contact_stats(contacts: list[Contact]) -> dict:
    return {
        "total_contacts": len(contacts),
        "by_type": count_by(contacts, "type"),
        "by_status": count_by(contacts, "status"),
    }
