"""
Tests for substring product search.

Covers the matching rule (name/description/category, case-insensitive),
the exact-match category filter, catalog-order preservation and idempotence.
"""

from commerce_mcp.search.product_search import matches_query, search_products


def _ids(products):
    return [p.id for p in products]


def _product(catalog, product_id):
    return next(p for p in catalog if p.id == product_id)


def test_drill_matches_name_and_description(catalog):
    # prod-005 also says "drilling" in its description
    results = search_products(catalog, "drill")
    assert _ids(results) == ["prod-001", "prod-002", "prod-005", "prod-006", "prod-008"]


def test_match_is_case_insensitive(catalog):
    assert _ids(search_products(catalog, "DRILL")) == _ids(search_products(catalog, "drill"))
    assert _ids(search_products(catalog, "DeWalt")) == ["prod-006"]


def test_matches_description_only(catalog):
    # "metalworking" only appears in the ball pein hammer description
    assert _ids(search_products(catalog, "metalworking")) == ["prod-007"]


def test_matches_category_text(catalog):
    results = search_products(catalog, "hand tools")
    assert _ids(results) == ["prod-003", "prod-004", "prod-007"]


def test_every_substring_match_is_returned(catalog):
    for product in catalog:
        for query in (product.name[:5], product.category.lower(), product.description[-8:]):
            assert product in search_products(catalog, query)


def test_no_match_returns_empty_list(catalog):
    assert search_products(catalog, "xyz123") == []


def test_category_filter_is_exact(catalog):
    results = search_products(catalog, "hammer", "Hand Tools")
    assert _ids(results) == ["prod-003", "prod-004", "prod-007"]
    assert all(p.category == "Hand Tools" for p in results)


def test_without_category_hammer_includes_power_tools(catalog):
    assert _ids(search_products(catalog, "hammer")) == ["prod-002", "prod-003", "prod-004", "prod-007"]


def test_category_filter_is_case_sensitive(catalog):
    assert search_products(catalog, "drill", "power tools") == []
    assert all(p.category == "Power Tools" for p in search_products(catalog, "drill", "Power Tools"))


def test_empty_category_applies_no_filter(catalog):
    assert _ids(search_products(catalog, "hammer", "")) == _ids(search_products(catalog, "hammer", None))


def test_order_follows_catalog_not_rating(catalog):
    results = search_products(catalog, "drill")
    ratings = [p.rating for p in results]
    assert ratings != sorted(ratings, reverse=True)
    catalog_ids = _ids(catalog)
    positions = [catalog_ids.index(p.id) for p in results]
    assert positions == sorted(positions)


def test_search_is_idempotent(catalog):
    first = search_products(catalog, "tool", "Power Tools")
    for _ in range(5):
        assert search_products(catalog, "tool", "Power Tools") == first


def test_matches_query_helper(catalog):
    assert matches_query(_product(catalog, "prod-004"), "household")
    assert not matches_query(_product(catalog, "prod-004"), "cordless")
