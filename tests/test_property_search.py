from estate_chat.catalog import KNOWN_LOCATIONS, PROPERTIES, get_properties, known_locations
from estate_chat.property_search import filter_properties, handle_property_query


def test_catalog_locations_are_lowercased_in_first_appearance_order(small_catalog):
    assert known_locations(small_catalog) == ("gurugram", "noida", "pune")
    assert KNOWN_LOCATIONS[0] == "gurugram"
    assert len(KNOWN_LOCATIONS) == len(set(KNOWN_LOCATIONS))


def test_get_properties_returns_a_fresh_list():
    first = get_properties()
    first.clear()
    assert len(get_properties()) == len(PROPERTIES)


def test_filter_matches_location_case_insensitively(small_catalog):
    result = filter_properties("GURUGRAM", 10_000_000, small_catalog)
    assert [p.type for p in result] == ["2BHK Apartment", "3BHK Apartment", "Villa"]


def test_filter_uses_exact_location_not_substring(small_catalog):
    assert filter_properties("guru", 100_000_000, small_catalog) == []


def test_filter_includes_price_equal_to_max(small_catalog):
    result = filter_properties("gurugram", 5_000_000, small_catalog)
    assert [p.price for p in result] == [4500000, 5000000]


def test_filter_returns_empty_list_when_nothing_matches(small_catalog):
    assert filter_properties("noida", 1_000, small_catalog) == []
    assert filter_properties("mumbai", 10**9, small_catalog) == []


def test_filter_is_pure_and_idempotent(small_catalog):
    before = tuple(small_catalog)
    first = filter_properties("gurugram", 9_000_000, small_catalog)
    second = filter_properties("gurugram", 9_000_000, small_catalog)

    assert first == second
    assert first is not second
    assert tuple(small_catalog) == before
    for p in first:
        assert p.location.lower() == "gurugram"
        assert p.price <= 9_000_000


def test_handle_property_query_end_to_end(gurugram_2bhk):
    answer = handle_property_query("2bhk under 50 lakhs in gurugram")

    assert answer.filters.location == "gurugram"
    assert answer.filters.max_price == 5_000_000
    assert answer.properties == [gurugram_2bhk]
    assert "• 2BHK Apartment (1200 sqft) - Rs. 45,00,000" in answer.reply


def test_handle_property_query_unknown_city_and_no_number(small_catalog):
    catalog = tuple(p for p in small_catalog if p.location != "Gurugram" or p.price > 5_000_000)
    answer = handle_property_query(
        "any houses in paris?",
        properties=catalog,
        known_locations=known_locations(catalog),
    )

    assert answer.filters.location == "gurugram"
    assert answer.filters.max_price == 5_000_000
    assert answer.properties == []
    assert answer.reply == "Sorry, no properties found in gurugram under Rs. 50,00,000."
