import re
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Any, Callable, List, Optional, Pattern, Sequence, Tuple

from .catalog import KNOWN_LOCATIONS
from .config import DEFAULT_LOCATION, DEFAULT_MAX_PRICE
from .schemas import FilterRequest

CRORE = 10_000_000
LAKH = 100_000

# Bare numbers below this are read as lakhs ("flat for 60"), the rest as rupees.
BARE_NUMBER_LAKH_THRESHOLD = 1000


def normalize(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return text.lower().strip()


# -----------------------------
# LOCATION
# -----------------------------
def extract_location(message: Any,
                     known_locations: Sequence[str] = KNOWN_LOCATIONS,
                     default: str = DEFAULT_LOCATION) -> str:
    """Return the first known location mentioned in the message, else the default."""
    q = normalize(message)
    for city in known_locations:
        if city in q:
            return city
    return default


# -----------------------------
# PRICE
# -----------------------------
class PriceKind(str, Enum):
    CRORE = "crore"
    LAKH = "lakh"
    RUPEES = "rupees"
    UNDER = "under"
    BARE = "bare"
    NONE = "none"


@dataclass(frozen=True)
class PriceExpression:
    kind: PriceKind
    amount: Optional[Decimal]  # number as written in the message
    value: int  # resolved budget in rupees


# Rounded down: the budget never exceeds what the user wrote.
def _to_rupees(amount: Decimal, multiplier: int = 1) -> int:
    return int((amount * multiplier).to_integral_value(rounding=ROUND_FLOOR))


def _crore(m) -> PriceExpression:
    amount = Decimal(m.group(1))
    return PriceExpression(PriceKind.CRORE, amount, _to_rupees(amount, CRORE))


def _lakh(m) -> PriceExpression:
    amount = Decimal(m.group(1))
    return PriceExpression(PriceKind.LAKH, amount, _to_rupees(amount, LAKH))


def _rupees(m) -> PriceExpression:
    amount = Decimal(m.group(1).replace(",", ""))
    return PriceExpression(PriceKind.RUPEES, amount, _to_rupees(amount))


def _under(m) -> PriceExpression:
    amount = Decimal(m.group(1))
    return PriceExpression(PriceKind.UNDER, amount, _to_rupees(amount, LAKH))


def _bare(m) -> PriceExpression:
    amount = Decimal(m.group(1))
    if amount < BARE_NUMBER_LAKH_THRESHOLD:
        return PriceExpression(PriceKind.BARE, amount, _to_rupees(amount, LAKH))
    return PriceExpression(PriceKind.BARE, amount, _to_rupees(amount))


# Most specific first; only the first matching rule applies.
PRICE_RULES: List[Tuple[PriceKind, Pattern, Callable[[Any], PriceExpression]]] = [
    (PriceKind.CRORE, re.compile(r"(\d+(?:\.\d+)?)\s*(crore|cr)"), _crore),
    (PriceKind.LAKH, re.compile(r"(\d+(?:\.\d+)?)\s*(lakh|lac)"), _lakh),
    (PriceKind.RUPEES, re.compile(r"(?:rs\.?|rupees)\s*(\d[\d,]*)"), _rupees),
    (PriceKind.UNDER, re.compile(r"\b(?:under|below|less than)\s+(\d+(?:\.\d+)?)"), _under),
    (PriceKind.BARE, re.compile(r"(\d+(?:\.\d+)?)"), _bare),
]


def parse_price_expression(message: Any, default: int = DEFAULT_MAX_PRICE) -> PriceExpression:
    q = normalize(message)
    for _, pattern, extract in PRICE_RULES:
        match = pattern.search(q)
        if match:
            return extract(match)
    return PriceExpression(PriceKind.NONE, None, default)


def extract_max_price(message: Any, default: int = DEFAULT_MAX_PRICE) -> int:
    return parse_price_expression(message, default).value


# -----------------------------
# FILTERS
# -----------------------------
def parse_query_to_filters(message: Any,
                           known_locations: Sequence[str] = KNOWN_LOCATIONS,
                           default_location: str = DEFAULT_LOCATION,
                           default_max_price: int = DEFAULT_MAX_PRICE) -> FilterRequest:
    """
    Turn a free-text message into a FilterRequest.
    Never fails: unknown cities and missing budgets fall back to the defaults.
    """
    return FilterRequest(
        location=extract_location(message, known_locations, default_location),
        max_price=extract_max_price(message, default_max_price),
    )
