"""Loan offers, rate bonuses and the input rules applied while editing them."""

import re
import uuid
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .config import (
    BASE_RATE_RANGE,
    BONUS_VALUE_RANGE,
    DEFAULT_BASE_RATE,
    DEFAULT_BONUS_VALUE,
    DEFAULT_HOUSE_PRICE,
    DEFAULT_LOAN_PERCENTAGE,
    DEFAULT_YEARS,
    LOAN_PERCENTAGE_RANGE,
    YEARS_RANGE,
)

# Leading decimal number, e.g. "1.5", "2.", ".75", "3abc"
_DECIMAL_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+))')

# Partial bonus values accepted while the user is still typing
_TRANSIENT_BONUS_INPUTS = ('', '0', '0.')


def new_id() -> str:
    """Generate a unique identifier for an offer or bonus."""
    return uuid.uuid4().hex


@dataclass
class Bonus:
    """A toggleable reduction of the base rate, in percentage points.

    ``value`` may briefly hold raw text while being edited; use
    :func:`coerce_bonus_value` to read it as a number.
    """

    id: str
    label: str = ''
    value: object = DEFAULT_BONUS_VALUE
    active: bool = True
    details: str = ''


@dataclass
class Offer:
    """A mortgage offer from one bank."""

    id: str
    bank_name: str = ''
    house_price: float = DEFAULT_HOUSE_PRICE
    loan_percentage: float = DEFAULT_LOAN_PERCENTAGE
    base_rate: float = DEFAULT_BASE_RATE  # annual percentage
    years: int = DEFAULT_YEARS
    extra_cost: float = 0.0  # flat amount added to each monthly payment
    bonuses: List[Bonus] = field(default_factory=list)

    @property
    def loan_amount(self) -> float:
        """Financed part of the house price."""
        return self.house_price * self.loan_percentage / 100

    @property
    def active_bonus(self) -> float:
        """Sum of active bonus reductions (not compounded)."""
        return sum(coerce_bonus_value(b.value) for b in self.bonuses if b.active)

    @property
    def effective_rate(self) -> float:
        """Base rate minus active bonuses, never below zero."""
        return max(0.0, self.base_rate - self.active_bonus)


def create_bonus() -> Bonus:
    """Create a bonus with default values."""
    return Bonus(id=new_id())


def create_offer(bank_name: str = '') -> Offer:
    """Create an offer with default values and one default bonus."""
    return Offer(id=new_id(), bank_name=bank_name, bonuses=[create_bonus()])


def parse_decimal(raw) -> Optional[float]:
    """Parse the leading decimal number of free text.

    Numbers pass through unchanged. Returns None when the text does not
    start with a number.
    """
    if isinstance(raw, (int, float)):
        return float(raw)
    if raw is None:
        return None

    match = _DECIMAL_PREFIX.match(str(raw))
    if not match:
        return None
    return float(match.group(1))


def coerce_bonus_value(raw) -> float:
    """Read a stored bonus value as a number; empty or non-numeric is 0."""
    parsed = parse_decimal(raw)
    if parsed is None or parsed != parsed:  # NaN
        return 0.0
    return parsed


def accept_bonus_input(raw: str) -> bool:
    """Whether an in-progress bonus edit should be kept.

    Empty text, "0" and "0." are transient states and always accepted.
    Anything else must parse to a number within the bonus range.
    """
    if raw in _TRANSIENT_BONUS_INPUTS:
        return True
    parsed = parse_decimal(raw)
    if parsed is None:
        return False
    low, high = BONUS_VALUE_RANGE
    return low <= parsed <= high


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to the closed interval [low, high]."""
    return max(low, min(high, value))


def clamp_offer(offer: Offer) -> Offer:
    """Return a copy of the offer with every field inside its input range."""
    bonus_low, bonus_high = BONUS_VALUE_RANGE
    return replace(
        offer,
        house_price=max(0.0, offer.house_price),
        loan_percentage=clamp(offer.loan_percentage, *LOAN_PERCENTAGE_RANGE),
        base_rate=clamp(offer.base_rate, *BASE_RATE_RANGE),
        years=int(clamp(int(offer.years), *YEARS_RANGE)),
        extra_cost=max(0.0, offer.extra_cost),
        bonuses=[
            replace(b, value=clamp(coerce_bonus_value(b.value), bonus_low, bonus_high))
            for b in offer.bonuses
        ],
    )


def update_offer(offers: List[Offer], updated: Offer) -> List[Offer]:
    """Replace the offer with the same id."""
    return [updated if o.id == updated.id else o for o in offers]


def delete_offer(offers: List[Offer], offer_id: str) -> List[Offer]:
    """Remove the offer with the given id."""
    return [o for o in offers if o.id != offer_id]


def add_bonus(offer: Offer) -> Offer:
    """Append a default bonus to the offer."""
    return replace(offer, bonuses=[*offer.bonuses, create_bonus()])


def update_bonus(offer: Offer, updated: Bonus) -> Offer:
    """Replace the bonus with the same id."""
    return replace(offer, bonuses=[updated if b.id == updated.id else b for b in offer.bonuses])


def delete_bonus(offer: Offer, bonus_id: str) -> Offer:
    """Remove the bonus with the given id."""
    return replace(offer, bonuses=[b for b in offer.bonuses if b.id != bonus_id])
