# catalog/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from catalog.core.errors import store_errors
from catalog.domain.models.product import Category, Product
from catalog.domain.services.validation import OPTIONAL_PRODUCT_FIELDS, ProductDraft


def category_name_filter(pattern: Optional[str]) -> Dict[str, Any]:
    """
    Case-insensitive pattern match on the embedded category name.
    The text is a regular expression, unanchored: "pho" and "^ph.ne" both hit "Phone".
    A malformed pattern is rejected by the server (OperationFailure).
    """
    if pattern is None:
        return {}
    return {"category.name": {"$regex": pattern, "$options": "i"}}


def _embedded_category(category: Category) -> Dict[str, Any]:
    # snapshot of the category at write time
    return {"_id": ObjectId(category.id), "name": category.name}


class ProductRepo:
    """
    Product repository backed by the 'products' collection.
    Documents embed their category as { _id, name }.
    Callers pass syntactically valid ids (see validation.is_object_id).
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def find_page(self, *, limit: int, skip: int, category_pattern: Optional[str] = None) -> List[Product]:
        with store_errors("products.find"):
            cursor = self.col.find(category_name_filter(category_pattern)).skip(skip).limit(limit)
            docs = await cursor.to_list(length=limit)
        return [Product.from_document(d) for d in docs]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        with store_errors("products.find_one"):
            doc = await self.col.find_one({"_id": ObjectId(product_id)})
        return Product.from_document(doc) if doc else None

    async def insert(self, draft: ProductDraft, category: Category) -> Product:
        now = datetime.now(timezone.utc)
        doc = {
            **draft.document_fields(),
            "category": _embedded_category(category),
            "createdAt": now,
            "updatedAt": now,
        }
        with store_errors("products.insert_one"):
            res = await self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return Product.from_document(doc)

    async def replace(self, product_id: str, draft: ProductDraft, category: Category) -> Optional[Product]:
        """
        Full replace of the mutable fields; optional fields missing from the
        draft are removed. Returns the document as it is after the update,
        or None when no product has that id.
        """
        fields = draft.document_fields()
        update: Dict[str, Any] = {
            "$set": {
                **fields,
                "category": _embedded_category(category),
                "updatedAt": datetime.now(timezone.utc),
            }
        }
        unset = {f: "" for f in OPTIONAL_PRODUCT_FIELDS if f not in fields}
        if unset:
            update["$unset"] = unset

        with store_errors("products.find_one_and_update"):
            doc = await self.col.find_one_and_update(
                {"_id": ObjectId(product_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        return Product.from_document(doc) if doc else None

    async def delete(self, product_id: str) -> bool:
        with store_errors("products.delete_one"):
            res = await self.col.delete_one({"_id": ObjectId(product_id)})
        return res.deleted_count > 0
