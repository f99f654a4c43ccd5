# catalog/api/v1/routers/products.py

from fastapi import APIRouter, Body, Depends, Query
from typing import Annotated, Any, List, Optional

from catalog.api.deps import category_repo, product_repo
from catalog.api.v1.schemas.catalog import ERROR_RESPONSES, MessageOut, ProductOut
from catalog.core.config import Settings, get_settings
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.repositories.product_repo import ProductRepo
from catalog.domain.services.product_catalog_svc import (
    create_product_svc,
    delete_product_svc,
    get_product_svc,
    list_products_svc,
    update_product_svc,
)

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


def _keys(payload: Any):
    return sorted(payload) if isinstance(payload, dict) else type(payload).__name__

# Untyped on purpose: a non-object body gets the same field errors as an empty one
ProductBody = Annotated[Any, Body(examples=[{
    "name": "Pixel 8",
    "category": "65f1c0ffee0000000000abcd",
    "price": 699,
    "remainingQuantity": 12,
    "chipset": "Tensor G3",
    "screenSize": 6.2,
    "memory": 8,
    "storage": 128,
    "imageUrl": "https://cdn.example.com/pixel8.png",
}])]


@router.get(
    "/products",
    summary="List products, paginated, optionally filtered by category name",
    responses={200: {"model": List[ProductOut]}, 500: ERROR_RESPONSES[500]},
)
async def list_products(
    # strings on purpose: malformed values fall back to the defaults instead of a 422
    pageSize: Optional[str] = Query(None, description="Page size, positive integer (default 4)"),
    pageIndex: Optional[str] = Query(None, description="1-based page index (default 1)"),
    category: Optional[str] = Query(None, description="Case-insensitive substring of the category name"),
    products: ProductRepo = Depends(product_repo),
    settings: Settings = Depends(get_settings),
):
    return await list_products_svc(
        products,
        page_size=pageSize,
        page_index=pageIndex,
        category=category,
        default_page_size=settings.default_page_size,
    )


@router.get("/products/{productId}", responses={200: {"model": ProductOut}, **ERROR_RESPONSES})
async def get_product(productId: str, products: ProductRepo = Depends(product_repo)):
    return await get_product_svc(products, productId)


@router.post("/products", status_code=201, responses={201: {"model": ProductOut}, **ERROR_RESPONSES})
async def create_product(
    payload: ProductBody = None,
    products: ProductRepo = Depends(product_repo),
    categories: CategoryRepo = Depends(category_repo),
):
    logger.info("Request: create_product keys=%s", _keys(payload))
    return await create_product_svc(products, categories, payload)


@router.put("/products/{productId}", status_code=201, responses={201: {"model": ProductOut}, **ERROR_RESPONSES})
async def update_product(
    productId: str,
    payload: ProductBody = None,
    products: ProductRepo = Depends(product_repo),
    categories: CategoryRepo = Depends(category_repo),
):
    logger.info("Request: update_product product_id=%s keys=%s", productId, _keys(payload))
    return await update_product_svc(products, categories, productId, payload)


@router.delete("/products/{productId}", responses={200: {"model": MessageOut}, **ERROR_RESPONSES})
async def delete_product(productId: str, products: ProductRepo = Depends(product_repo)):
    return await delete_product_svc(products, productId)
