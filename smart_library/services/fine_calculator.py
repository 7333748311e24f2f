"""
Fine rules for returned (or about to be returned) transactions.

Any return after the due date counts as a missing book: the full missing
penalty (200% of the price) applies, plus a per-day late fee. Damage adds a
surcharge on top, whether or not the return was late. Totals are rounded to
whole currency units.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from smart_library.models.enums import DamageType
from smart_library.utils.clock import utcnow

MISSING_PENALTY_RATE = Decimal("2")
LATE_FEE_PER_DAY = 50
DAMAGE_RATES = {
    DamageType.NONE: Decimal("0"),
    DamageType.SMALL: Decimal("0.10"),
    DamageType.LARGE: Decimal("0.50"),
}

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class FineItem:
    label: str
    amount: Decimal

    def to_dict(self):
        return {"label": self.label, "amount": float(self.amount)}


def days_late(due_date: datetime, returned_at: datetime) -> int:
    """Whole days past due, any partial day counting as a full one."""
    if returned_at <= due_date:
        return 0
    return math.ceil((returned_at - due_date).total_seconds() / SECONDS_PER_DAY)


def fine_breakdown(
    due_date: datetime,
    price,
    damage: DamageType = DamageType.NONE,
    returned_at: datetime | None = None,
) -> list[FineItem]:
    price = Decimal(str(price))
    returned_at = returned_at or utcnow()
    items = []

    late = days_late(due_date, returned_at)
    if late > 0:
        items.append(FineItem("Missing book fine (200% of price)", price * MISSING_PENALTY_RATE))
        items.append(FineItem(f"Late return fine ({LATE_FEE_PER_DAY} x {late} days)",
                              Decimal(LATE_FEE_PER_DAY * late)))

    damage = DamageType(damage)
    if damage == DamageType.SMALL:
        items.append(FineItem("Small damage (10% of price)", price * DAMAGE_RATES[damage]))
    elif damage == DamageType.LARGE:
        items.append(FineItem("Large damage (50% of price)", price * DAMAGE_RATES[damage]))

    return items


def total_of(items) -> int:
    total = sum((item.amount for item in items), Decimal("0"))
    return max(0, int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def calculate_fine(transaction, price, damage: DamageType = DamageType.NONE, now: datetime | None = None) -> int:
    """
    Fine for `transaction` priced at `price`.

    The effective return moment is transaction.return_date when set,
    otherwise `now` (defaulting to the current UTC time).
    """
    effective = transaction.return_date or now or utcnow()
    return total_of(fine_breakdown(transaction.due_date, price, damage, effective))
