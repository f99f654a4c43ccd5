"""Shared fixtures: in-memory stand-ins for the repositories and an API client wired to them."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from catalog.api.deps import category_repo, product_repo
from catalog.domain.models.product import Category, Product
from catalog.domain.services.validation import ProductDraft
from catalog.main import app


class InMemoryCategoryRepo:
    def __init__(self):
        self.docs: Dict[ObjectId, dict] = {}
        self.calls: List[str] = []

    def add(self, name: str) -> Category:
        oid = ObjectId()
        self.docs[oid] = {"_id": oid, "name": name}
        return Category(id=str(oid), name=name)

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        self.calls.append("get_by_id")
        doc = self.docs.get(ObjectId(category_id))
        return Category.from_document(doc) if doc else None

    async def list_all(self) -> List[Category]:
        self.calls.append("list_all")
        return sorted((Category.from_document(d) for d in self.docs.values()), key=lambda c: c.name)

    async def insert(self, name: str) -> Category:
        self.calls.append("insert")
        return self.add(name)


class InMemoryProductRepo:
    """Keeps documents in insertion order, like a collection scan."""

    def __init__(self):
        self.docs: Dict[ObjectId, dict] = {}
        self.calls: List[str] = []

    def add(self, category: Category, **fields) -> Product:
        oid = ObjectId()
        now = datetime.now(timezone.utc)
        doc = {
            "_id": oid,
            "price": 100,
            **fields,
            "category": {"_id": ObjectId(category.id), "name": category.name},
            "createdAt": now,
            "updatedAt": now,
        }
        self.docs[oid] = doc
        return Product.from_document(doc)

    async def find_page(self, *, limit: int, skip: int, category_pattern: Optional[str] = None) -> List[Product]:
        self.calls.append("find_page")
        docs = list(self.docs.values())
        if category_pattern is not None:
            rx = re.compile(category_pattern, re.IGNORECASE)
            docs = [d for d in docs if rx.search(d["category"]["name"])]
        return [Product.from_document(d) for d in docs[skip:skip + limit]]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        self.calls.append("get_by_id")
        doc = self.docs.get(ObjectId(product_id))
        return Product.from_document(doc) if doc else None

    async def insert(self, draft: ProductDraft, category: Category) -> Product:
        self.calls.append("insert")
        return self.add(category, **draft.document_fields())

    async def replace(self, product_id: str, draft: ProductDraft, category: Category) -> Optional[Product]:
        self.calls.append("replace")
        oid = ObjectId(product_id)
        old = self.docs.get(oid)
        if old is None:
            return None
        self.docs[oid] = {
            "_id": oid,
            **draft.document_fields(),
            "category": {"_id": ObjectId(category.id), "name": category.name},
            "createdAt": old["createdAt"],
            "updatedAt": datetime.now(timezone.utc),
        }
        return Product.from_document(self.docs[oid])

    async def delete(self, product_id: str) -> bool:
        self.calls.append("delete")
        return self.docs.pop(ObjectId(product_id), None) is not None


@pytest.fixture()
def categories() -> InMemoryCategoryRepo:
    return InMemoryCategoryRepo()


@pytest.fixture()
def products() -> InMemoryProductRepo:
    return InMemoryProductRepo()


@pytest.fixture()
def client(products, categories):
    """TestClient without the lifespan: no Mongo connection is opened."""
    app.dependency_overrides[product_repo] = lambda: products
    app.dependency_overrides[category_repo] = lambda: categories
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def phone(categories) -> Category:
    return categories.add("Phone")


@pytest.fixture()
def laptop(categories) -> Category:
    return categories.add("Laptop")


@pytest.fixture()
def valid_payload(phone) -> dict:
    return {
        "name": "Pixel 8",
        "category": phone.id,
        "price": 699,
        "remainingQuantity": 12,
        "chipset": "Tensor G3",
        "screenSize": 6.2,
        "memory": 8,
        "storage": 128,
        "thumbnailUrl": "https://cdn.example.com/pixel8-thumb.png",
        "imageUrl": "https://cdn.example.com/pixel8.png",
    }
