import logging
import time
from typing import Any, Dict, List, Optional

from catalog.core.errors import InvalidIdentifier, NotFound
from catalog.domain.models.product import Category
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.repositories.product_repo import ProductRepo
from catalog.domain.services.validation import (
    ProductDraft,
    is_object_id,
    positive_int_or,
    validate_product_payload,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_INDEX = 1


def _require_product_id(product_id: str) -> None:
    if not is_object_id(product_id):
        raise InvalidIdentifier({"error": "productId is invalid"})


async def _resolve_category(categories: CategoryRepo, draft: ProductDraft) -> Category:
    category = await categories.get_by_id(draft.category_id)
    if category is None:
        raise NotFound("Category not found")
    return category


async def list_products_svc(
    products: ProductRepo,
    page_size: Optional[str],
    page_index: Optional[str],
    category: Optional[str] = None,
    default_page_size: int = 4,
) -> List[Dict[str, Any]]:
    t0 = time.perf_counter()
    limit = positive_int_or(page_size, default_page_size)
    index = positive_int_or(page_index, DEFAULT_PAGE_INDEX)
    skip = (index - 1) * limit
    logger.info("list_products start limit=%s skip=%s category=%r", limit, skip, category)

    found = await products.find_page(limit=limit, skip=skip, category_pattern=category)

    logger.info("list_products done items=%s time=%.3fs", len(found), time.perf_counter() - t0)
    return [p.transform() for p in found]


async def get_product_svc(products: ProductRepo, product_id: str) -> Dict[str, Any]:
    _require_product_id(product_id)
    product = await products.get_by_id(product_id)
    if product is None:
        raise NotFound("Product not found")
    return product.transform()


async def create_product_svc(
    products: ProductRepo,
    categories: CategoryRepo,
    payload: Any,
) -> Dict[str, Any]:
    draft = validate_product_payload(payload)
    category = await _resolve_category(categories, draft)

    product = await products.insert(draft, category)
    logger.info("create_product ok id=%s category=%s", product.id, category.id)
    return {**product.transform(), "category": category.transform()}


async def update_product_svc(
    products: ProductRepo,
    categories: CategoryRepo,
    product_id: str,
    payload: Any,
) -> Dict[str, Any]:
    _require_product_id(product_id)
    draft = validate_product_payload(payload)
    category = await _resolve_category(categories, draft)

    # the repo hands back the post-update document, never the pre-update one
    product = await products.replace(product_id, draft, category)
    if product is None:
        raise NotFound("Product not found")
    logger.info("update_product ok id=%s category=%s", product.id, category.id)
    return {**product.transform(), "category": category.transform()}


async def delete_product_svc(products: ProductRepo, product_id: str) -> Dict[str, str]:
    if not is_object_id(product_id):
        raise InvalidIdentifier({"productId": "ProductId is invalid"})

    if await products.get_by_id(product_id) is None:
        raise NotFound("Product not found")
    # removed by a concurrent request after the lookup
    if not await products.delete(product_id):
        raise NotFound("Product not found")
    logger.info("delete_product ok id=%s", product_id)
    return {"message": "Deleted successfully"}
