# catalog/domain/repositories/category_repo.py

from __future__ import annotations
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog.core.errors import store_errors
from catalog.domain.models.product import Category


class CategoryRepo:
    """Category repository backed by the 'categories' collection."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "categories"):
        self.col = db[collection_name]

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        with store_errors("categories.find_one"):
            doc = await self.col.find_one({"_id": ObjectId(category_id)})
        return Category.from_document(doc) if doc else None

    async def list_all(self) -> List[Category]:
        with store_errors("categories.find"):
            docs = await self.col.find({}).sort("name", 1).to_list(length=None)
        return [Category.from_document(d) for d in docs]

    async def insert(self, name: str) -> Category:
        doc = {"name": name}
        with store_errors("categories.insert_one"):
            res = await self.col.insert_one(doc)
        return Category(id=str(res.inserted_id), name=name)
