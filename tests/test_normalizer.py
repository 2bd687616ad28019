"""Tests for response normalization."""

from decimal import Decimal

import pytest

from plant_catalog_server.models import CategoryRecord, ItemRecord
from plant_catalog_server.normalizer import (
    UNKNOWN_CATEGORY_LABEL,
    UNNAMED_ITEM,
    extract_list,
    extract_single,
    iter_categories,
    iter_items,
    to_category_record,
    to_item_record,
)
from tests.conftest import ALL_PLANTS_PAYLOAD, CATEGORIES_PAYLOAD, EMPTY_CATEGORY_PAYLOAD, PLANT_DETAIL_PAYLOAD

SAMPLE_LIST = [{"id": 3, "name": "c"}, {"id": 1, "name": "a"}, {"id": 2, "name": "b"}]


class TestExtractList:
    @pytest.mark.parametrize("key", ["categories", "plants", "data"])
    def test_known_containers(self, key):
        result = extract_list({key: SAMPLE_LIST, "status": True})
        assert result == SAMPLE_LIST
        assert [entry["id"] for entry in result] == [3, 1, 2]

    def test_bare_list(self):
        assert extract_list(SAMPLE_LIST) is SAMPLE_LIST

    def test_empty_bare_list(self):
        assert extract_list([]) == []

    def test_container_priority(self):
        payload = {"data": [{"id": "d"}], "plants": [{"id": "p"}], "categories": [{"id": "c"}]}
        assert extract_list(payload) == [{"id": "c"}]

    def test_non_list_container_is_skipped(self):
        payload = {"categories": {"id": 1}, "data": [{"id": 2}]}
        assert extract_list(payload) == [{"id": 2}]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            EMPTY_CATEGORY_PAYLOAD,
            {"items": [1, 2]},
            {"data": {"plants": [{"id": 1}]}},
            {"plants": None},
            None,
            "plants",
            42,
            True,
        ],
    )
    def test_unknown_shapes_give_empty_list(self, payload):
        assert extract_list(payload) == []


class TestToCategoryRecord:
    def test_category_name(self):
        assert to_category_record({"id": 1, "category_name": "Fruit Tree"}) == CategoryRecord(
            id="1", label="Fruit Tree"
        )

    def test_label_and_id_fallbacks(self):
        record = to_category_record({"category_id": 5, "category": "Shade Tree"})
        assert record.id == "5"
        assert record.label == "Shade Tree"

        record = to_category_record({"cat_id": "x", "name": "Bamboo"})
        assert record.id == "x"
        assert record.label == "Bamboo"

    def test_empty_label_falls_through(self):
        assert to_category_record({"category_name": "", "name": "Palm"}).label == "Palm"

    def test_falsy_label_and_id_are_skipped(self):
        record = to_category_record({"id": 0, "category_name": 0, "category": False, "name": "Palm"})
        assert record.label == "Palm"
        assert record.id is None
        assert not record.selectable

    def test_zero_item_id_has_no_detail_view(self):
        assert to_item_record({"id": 0, "_id": "z9", "name": "Fern"}).id is None

    def test_missing_fields_use_placeholders(self):
        record = to_category_record({"small_description": "?"})
        assert record.label == UNKNOWN_CATEGORY_LABEL
        assert record.id is None
        assert not record.selectable

    @pytest.mark.parametrize("raw", [None, "Fruit", 3, []])
    def test_non_object_entries(self, raw):
        assert to_category_record(raw) == CategoryRecord(id=None, label=UNKNOWN_CATEGORY_LABEL)


class TestToItemRecord:
    def test_primary_field_names(self):
        raw = ALL_PLANTS_PAYLOAD["plants"][0]
        assert to_item_record(raw) == ItemRecord(
            id="1",
            name="Mango Tree",
            image_url="https://i.ibb.co/mango.jpg",
            description="A fast-growing tropical tree that produces delicious, juicy mangoes.",
            category="Fruit Tree",
            price=Decimal("500"),
        )

    def test_alternative_field_names(self):
        record = to_item_record(ALL_PLANTS_PAYLOAD["plants"][1])
        assert record.id == "n-2"
        assert record.name == "Neem Tree"
        assert record.image_url == "https://i.ibb.co/neem.jpg"
        assert record.description == "Medicinal tree"
        assert record.category == "Medicinal Tree"
        assert record.price == Decimal("300")

    def test_thumbnail_and_plant_id(self):
        record = to_item_record({"plant_id": 7, "thumbnail": "guava.jpg"})
        assert record.id == "7"
        assert record.image_url == "guava.jpg"

    def test_long_description(self):
        assert to_item_record({"long_description": "Long text"}).description == "Long text"

    def test_fields_resolve_independently(self):
        record = to_item_record({"title": "Teak", "name": None, "cost": 90, "img": "teak.png"})
        assert record.name == "Teak"
        assert record.price == Decimal("90")
        assert record.image_url == "teak.png"
        assert record.id is None

    def test_missing_name_uses_placeholder(self):
        assert to_item_record({"id": 1, "price": 5}).name == UNNAMED_ITEM

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"price": "12.5"}, Decimal("12.5")),
            ({"price": 12.5}, Decimal("12.5")),
            ({}, Decimal("0")),
            ({"price": "free"}, Decimal("0")),
            ({"price": None, "cost": "7"}, Decimal("7")),
        ],
    )
    def test_price_coercion(self, raw, expected):
        assert to_item_record(raw).price == expected

    def test_defaults_for_missing_text_fields(self):
        record = to_item_record({})
        assert record == ItemRecord(id=None, name=UNNAMED_ITEM)
        assert record.image_url == ""
        assert record.description == ""
        assert record.category == ""

    @pytest.mark.parametrize("raw", [None, "Mango", 5, [{"name": "Mango"}]])
    def test_non_object_entries(self, raw):
        assert to_item_record(raw).name == UNNAMED_ITEM


class TestExtractSingle:
    def test_wrapped_object(self):
        record = extract_single({"plants": {"name": "Mango", "price": 50}})
        assert record == ItemRecord(name="Mango", price=Decimal("50"))

    def test_detail_payload(self):
        record = extract_single(PLANT_DETAIL_PAYLOAD)
        assert record.id == "1"
        assert record.name == "Mango Tree"

    @pytest.mark.parametrize("key", ["plants", "data", "plant"])
    def test_container_keys(self, key):
        assert extract_single({key: {"title": "Neem"}}).name == "Neem"

    def test_one_element_list(self):
        assert extract_single({"data": [{"name": "Teak", "cost": 9}]}).price == Decimal("9")
        assert extract_single([{"name": "Teak"}]).name == "Teak"

    def test_bare_object(self):
        assert extract_single({"id": 4, "name": "Banyan"}).id == "4"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            [],
            None,
            "Mango",
            {"status": False, "message": "no plant"},
            {"plants": None},
            {"plants": []},
            {"data": [None]},
            {"plants": {}},
        ],
    )
    def test_not_found(self, payload):
        assert extract_single(payload) is None


class TestIterators:
    def test_iter_categories(self):
        records = list(iter_categories(CATEGORIES_PAYLOAD))
        assert [record.label for record in records] == ["Fruit Tree", "Flowering Tree", "Mystery Tree"]
        assert [record.selectable for record in records] == [True, True, False]

    def test_iter_items_is_lazy(self):
        items = iter_items(ALL_PLANTS_PAYLOAD)
        assert next(items).name == "Mango Tree"
        assert next(items).name == "Neem Tree"
        with pytest.raises(StopIteration):
            next(items)

    def test_iter_items_unknown_shape(self):
        assert list(iter_items(EMPTY_CATEGORY_PAYLOAD)) == []
