"""Repositories against a mocked Motor collection: query shapes and error translation."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, OperationFailure, ServerSelectionTimeoutError

from catalog.core.errors import StoreError, StoreErrorKind
from catalog.domain.models.product import Category
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.repositories.product_repo import ProductRepo, category_name_filter
from catalog.domain.services.validation import validate_product_payload

pytestmark = pytest.mark.unit

CATEGORY = Category(id=str(ObjectId()), name="Phone")


def _db(col) -> MagicMock:
    db = MagicMock()
    db.__getitem__.return_value = col
    return db


def _product_doc(**fields) -> dict:
    return {
        "_id": ObjectId(),
        "name": "Pixel",
        "price": 10,
        "category": {"_id": ObjectId(CATEGORY.id), "name": CATEGORY.name},
        **fields,
    }


class TestCategoryNameFilter:
    def test_no_pattern(self):
        assert category_name_filter(None) == {}

    def test_pattern_passed_through_case_insensitive(self):
        assert category_name_filter("^ph.ne") == {"category.name": {"$regex": "^ph.ne", "$options": "i"}}


class TestProductRepo:
    def test_find_page_applies_filter_skip_limit(self):
        col = MagicMock()
        cursor = col.find.return_value.skip.return_value.limit.return_value
        cursor.to_list = AsyncMock(return_value=[_product_doc()])
        repo = ProductRepo(_db(col))

        found = asyncio.run(repo.find_page(limit=4, skip=8, category_pattern="pho"))

        col.find.assert_called_once_with({"category.name": {"$regex": "pho", "$options": "i"}})
        col.find.return_value.skip.assert_called_once_with(8)
        col.find.return_value.skip.return_value.limit.assert_called_once_with(4)
        assert [p.name for p in found] == ["Pixel"]
        assert found[0].category == CATEGORY

    def test_get_by_id_queries_object_id(self):
        oid = ObjectId()
        col = MagicMock()
        col.find_one = AsyncMock(return_value=None)
        repo = ProductRepo(_db(col))

        assert asyncio.run(repo.get_by_id(str(oid))) is None
        col.find_one.assert_awaited_once_with({"_id": oid})

    def test_insert_embeds_category_and_timestamps(self):
        oid = ObjectId()
        col = MagicMock()
        col.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))
        repo = ProductRepo(_db(col))
        draft = validate_product_payload({"name": "Pixel", "category": CATEGORY.id, "price": 10, "memory": 8})

        product = asyncio.run(repo.insert(draft, CATEGORY))

        doc = col.insert_one.await_args.args[0]
        assert doc["category"] == {"_id": ObjectId(CATEGORY.id), "name": "Phone"}
        assert doc["memory"] == 8
        assert doc["createdAt"] == doc["updatedAt"]
        assert "remainingQuantity" not in doc
        assert product.id == str(oid)

    def test_replace_sets_present_and_unsets_absent_fields(self):
        oid = ObjectId()
        col = MagicMock()
        col.find_one_and_update = AsyncMock(return_value=_product_doc(_id=oid, name="New", chipset="X"))
        repo = ProductRepo(_db(col))
        draft = validate_product_payload({"name": "New", "category": CATEGORY.id, "price": 10, "chipset": "X"})

        product = asyncio.run(repo.replace(str(oid), draft, CATEGORY))

        filt, update = col.find_one_and_update.await_args.args
        assert filt == {"_id": oid}
        assert update["$set"]["name"] == "New"
        assert update["$set"]["chipset"] == "X"
        assert "chipset" not in update["$unset"]
        assert set(update["$unset"]) == {
            "remainingQuantity", "screenSize", "memory", "storage", "thumbnailUrl", "imageUrl",
        }
        assert col.find_one_and_update.await_args.kwargs["return_document"] is ReturnDocument.AFTER
        assert product.name == "New"

    def test_replace_missing_product(self):
        col = MagicMock()
        col.find_one_and_update = AsyncMock(return_value=None)
        repo = ProductRepo(_db(col))
        draft = validate_product_payload({"name": "New", "category": CATEGORY.id, "price": 10})

        assert asyncio.run(repo.replace(str(ObjectId()), draft, CATEGORY)) is None

    def test_delete_reports_whether_something_was_removed(self):
        col = MagicMock()
        col.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))
        repo = ProductRepo(_db(col))
        assert asyncio.run(repo.delete(str(ObjectId()))) is False

    @pytest.mark.parametrize("exc,kind", [
        (ServerSelectionTimeoutError("no servers"), StoreErrorKind.UNAVAILABLE),
        (DuplicateKeyError("dup key"), StoreErrorKind.CONSTRAINT_VIOLATION),
        (OperationFailure("boom"), StoreErrorKind.UNKNOWN),
    ])
    def test_driver_errors_become_store_errors(self, exc, kind):
        col = MagicMock()
        col.find_one = AsyncMock(side_effect=exc)
        repo = ProductRepo(_db(col))

        with pytest.raises(StoreError) as err:
            asyncio.run(repo.get_by_id(str(ObjectId())))
        assert err.value.kind is kind
        assert err.value.cause is exc


class TestCategoryRepo:
    def test_list_all_sorted_by_name(self):
        col = MagicMock()
        docs = [{"_id": ObjectId(), "name": "Laptop"}, {"_id": ObjectId(), "name": "Phone"}]
        col.find.return_value.sort.return_value.to_list = AsyncMock(return_value=docs)
        repo = CategoryRepo(_db(col))

        found = asyncio.run(repo.list_all())

        col.find.return_value.sort.assert_called_once_with("name", 1)
        assert [c.name for c in found] == ["Laptop", "Phone"]

    def test_insert(self):
        oid = ObjectId()
        col = MagicMock()
        col.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))
        repo = CategoryRepo(_db(col))

        category = asyncio.run(repo.insert("Tablet"))

        col.insert_one.assert_awaited_once_with({"name": "Tablet"})
        assert category == Category(id=str(oid), name="Tablet")
