import json

import pytest
from pydantic import ValidationError

from commerce_mcp.data.catalog_store import (
    CatalogLoadError,
    CatalogStore,
    build_catalog,
    load_catalog,
)


def _record(product_id="p-1", **overrides):
    record = {
        "id": product_id,
        "name": "Test Drill",
        "category": "Power Tools",
        "price": 10.0,
        "description": "A drill",
        "image": "https://example.com/drill.jpg",
        "inStock": True,
        "rating": 4.0,
    }
    record.update(overrides)
    return record


def _product(catalog, product_id):
    return next(p for p in catalog if p.id == product_id)


def test_bundled_catalog_loads_in_order(catalog):
    assert isinstance(catalog, CatalogStore)
    assert len(catalog) == 8
    assert [p.id for p in catalog] == [f"prod-00{i}" for i in range(1, 9)]


def test_bundled_catalog_ids_unique(catalog):
    ids = [p.id for p in catalog]
    assert len(ids) == len(set(ids))


def test_bundled_catalog_fields(catalog):
    drill = _product(catalog, "prod-001")
    assert drill.name == "Ozito 18V Cordless Drill Driver Kit"
    assert drill.category == "Power Tools"
    assert drill.price == 89.0
    assert drill.inStock is True
    assert 0 <= drill.rating <= 5


def test_products_are_immutable(catalog):
    product = _product(catalog, "prod-003")
    with pytest.raises(ValidationError):
        product.price = 0
    assert isinstance(catalog.products, tuple)


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(CatalogLoadError, match="not found"):
        load_catalog(tmp_path / "nope.json")


def test_malformed_json_is_fatal(tmp_path):
    path = tmp_path / "products.json"
    path.write_text("[{not json")
    with pytest.raises(CatalogLoadError, match="Malformed"):
        load_catalog(path)


def test_non_list_root_is_fatal(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": []}))
    with pytest.raises(CatalogLoadError, match="JSON array"):
        load_catalog(path)


def test_invalid_record_is_fatal():
    with pytest.raises(CatalogLoadError, match="index 1"):
        build_catalog([_record("a"), _record("b", rating=7)])


def test_negative_price_is_fatal():
    with pytest.raises(CatalogLoadError):
        build_catalog([_record(price=-1)])


def test_duplicate_id_is_fatal():
    with pytest.raises(CatalogLoadError, match="Duplicate product id: a"):
        build_catalog([_record("a"), _record("a")])
