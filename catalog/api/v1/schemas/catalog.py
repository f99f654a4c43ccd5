# api/v1/schemas/catalog.py
# Response shapes, used to document the routes in OpenAPI.
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union

class CategoryOut(BaseModel):
    id: str
    name: str

class ProductOut(BaseModel):
    id: str
    name: str
    category: Optional[CategoryOut] = None
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

    model_config = ConfigDict(populate_by_name=True)

class ErrorOut(BaseModel):
    error: str

class MessageOut(BaseModel):
    message: str


ERROR_RESPONSES = {
    400: {"description": "Invalid identifier, or field -> message for an invalid payload"},
    404: {"model": ErrorOut, "description": "Product or category not found"},
    500: {"model": ErrorOut, "description": "Store failure"},
}
