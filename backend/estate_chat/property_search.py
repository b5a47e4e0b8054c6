from dataclasses import dataclass
from typing import Iterable, List, Sequence

from loguru import logger

from .catalog import KNOWN_LOCATIONS, PROPERTIES
from .config import DEFAULT_LOCATION, DEFAULT_MAX_PRICE
from .formatting import format_reply
from .parser import parse_query_to_filters
from .schemas import FilterRequest, Property


@dataclass(frozen=True)
class PropertyAnswer:
    reply: str
    filters: FilterRequest
    properties: List[Property]


def filter_properties(location: str, max_price: float,
                      properties: Iterable[Property] = PROPERTIES) -> List[Property]:
    """Records in `location` (case-insensitive exact match) priced at or below `max_price`."""
    wanted = location.lower()
    return [
        p for p in properties
        if p.location.lower() == wanted and p.price <= max_price
    ]


def handle_property_query(query_text: str,
                          properties: Sequence[Property] = PROPERTIES,
                          known_locations: Sequence[str] = KNOWN_LOCATIONS,
                          default_location: str = DEFAULT_LOCATION,
                          default_max_price: int = DEFAULT_MAX_PRICE) -> PropertyAnswer:
    """
    Handle a property search without the external model:
    interpret the message, filter the catalog and format the reply.
    """
    filters = parse_query_to_filters(
        query_text,
        known_locations=known_locations,
        default_location=default_location,
        default_max_price=default_max_price,
    )
    matches = filter_properties(filters.location, filters.max_price, properties)
    logger.debug(f"Local search {filters.as_args()} -> {len(matches)} match(es)")

    return PropertyAnswer(
        reply=format_reply(filters.location, filters.max_price, matches),
        filters=filters,
        properties=matches,
    )
