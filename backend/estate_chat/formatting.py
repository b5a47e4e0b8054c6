# backend/estate_chat/formatting.py
from decimal import Decimal
from typing import Sequence, Union

from .schemas import Property

Number = Union[int, float, Decimal]


def format_inr(amount: Number) -> str:
    """
    Group digits the South-Asian way: last three digits, then pairs.
    4500000 -> "45,00,000", 12345 -> "12,345".
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = abs(value)

    decimals = ""
    if value != value.to_integral_value():
        value = value.quantize(Decimal("0.01"))
        decimals = f"{value - int(value):.2f}"[1:].rstrip("0").rstrip(".")
    digits = str(int(value))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])

    return f"{sign}{digits}{decimals}"


def format_property_line(prop: Property) -> str:
    return f"• {prop.type} ({prop.size}) - Rs. {format_inr(prop.price)}"


def format_reply(location: str, max_price: Number, properties: Sequence[Property]) -> str:
    if not properties:
        return f"Sorry, no properties found in {location} under Rs. {format_inr(max_price)}."

    header = f"Here are some properties in {location} under Rs. {format_inr(max_price)}:"
    return "\n".join([header] + [format_property_line(p) for p in properties])


def format_property_caption(data: dict) -> str:
    """Caption for a property card built from the /api/chat JSON."""
    price = data.get("price")
    price_text = format_inr(price) if isinstance(price, (int, float)) and not isinstance(price, bool) else "-"
    return f"📍 {data.get('location', '')} · 💰 Rs. {price_text}"
