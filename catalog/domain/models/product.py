from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, Union
from datetime import datetime


class Category(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(frozen=True)  # immuable = safe

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Category":
        return cls(id=str(doc["_id"]), name=doc.get("name") or "")

    def transform(self) -> dict:
        return self.model_dump()


class Product(BaseModel):
    """
    Stored product, as read back from the 'products' collection.
    Field aliases are the document (and wire) names.
    """
    id: str
    name: str
    category: Optional[Category] = None
    price: int
    remaining_quantity: Optional[int] = Field(None, alias="remainingQuantity")
    chipset: Optional[str] = None
    screen_size: Optional[Union[int, float]] = Field(None, alias="screenSize")
    memory: Optional[Union[int, float]] = None
    storage: Optional[Union[int, float]] = None
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Product":
        data = {k: v for k, v in doc.items() if k not in ("_id", "category", "__v")}
        cat = doc.get("category")
        return cls(
            id=str(doc["_id"]),
            category=Category.from_document(cat) if isinstance(cat, dict) and "_id" in cat else None,
            **data,
        )

    def transform(self) -> dict:
        """Public JSON shape: camelCase keys, absent fields omitted, category transformed."""
        out = self.model_dump(by_alias=True, exclude_none=True, exclude={"category"}, mode="json")
        if self.category is not None:
            out["category"] = self.category.transform()
        return out
