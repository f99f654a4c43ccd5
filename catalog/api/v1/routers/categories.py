# catalog/api/v1/routers/categories.py
from fastapi import APIRouter, Body, Depends
from typing import Any, List

from catalog.api.deps import category_repo
from catalog.api.v1.schemas.catalog import ERROR_RESPONSES, CategoryOut
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.services.category_svc import (
    create_category_svc,
    get_category_svc,
    list_categories_svc,
)

router = APIRouter(tags=["categories"])


@router.get("/categories", responses={200: {"model": List[CategoryOut]}, 500: ERROR_RESPONSES[500]})
async def list_categories(categories: CategoryRepo = Depends(category_repo)):
    return await list_categories_svc(categories)


@router.get("/categories/{categoryId}", responses={200: {"model": CategoryOut}, **ERROR_RESPONSES})
async def get_category(categoryId: str, categories: CategoryRepo = Depends(category_repo)):
    return await get_category_svc(categories, categoryId)


@router.post("/categories", status_code=201, responses={201: {"model": CategoryOut}, **ERROR_RESPONSES})
async def create_category(
    payload: Any = Body(None, examples=[{"name": "Phone"}]),
    categories: CategoryRepo = Depends(category_repo),
):
    return await create_category_svc(categories, payload)
