# backend/estate_chat/catalog.py
from typing import Iterable, List, Tuple

from .schemas import Property

_RAW_PROPERTIES = [
    {"type": "2BHK Apartment", "size": "1200 sqft", "price": 4500000, "location": "Gurugram"},
    {"type": "3BHK Apartment", "size": "1650 sqft", "price": 8500000, "location": "Gurugram"},
    {"type": "Independent Villa", "size": "3200 sqft", "price": 25000000, "location": "Gurugram"},
    {"type": "1BHK Apartment", "size": "650 sqft", "price": 2800000, "location": "Noida"},
    {"type": "3BHK Apartment", "size": "1500 sqft", "price": 7200000, "location": "Noida"},
    {"type": "2BHK Builder Floor", "size": "1100 sqft", "price": 6500000, "location": "Delhi"},
    {"type": "4BHK Penthouse", "size": "4000 sqft", "price": 45000000, "location": "Mumbai"},
    {"type": "1BHK Apartment", "size": "550 sqft", "price": 9500000, "location": "Mumbai"},
    {"type": "2BHK Apartment", "size": "1150 sqft", "price": 6800000, "location": "Bangalore"},
    {"type": "3BHK Villa", "size": "2400 sqft", "price": 15000000, "location": "Bangalore"},
    {"type": "2BHK Apartment", "size": "980 sqft", "price": 4200000, "location": "Pune"},
    {"type": "Studio Apartment", "size": "450 sqft", "price": 2500000, "location": "Pune"},
]

PROPERTIES: Tuple[Property, ...] = tuple(Property(**p) for p in _RAW_PROPERTIES)


def known_locations(properties: Iterable[Property]) -> Tuple[str, ...]:
    """Distinct lowercased locations, in the order they first appear."""
    seen = []
    for p in properties:
        city = p.location.lower()
        if city not in seen:
            seen.append(city)
    return tuple(seen)


KNOWN_LOCATIONS: Tuple[str, ...] = known_locations(PROPERTIES)


def get_properties() -> List[Property]:
    return list(PROPERTIES)
