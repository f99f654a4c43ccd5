import logging
from typing import Any, Dict, List

from catalog.core.errors import InvalidIdentifier, NotFound
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.services.validation import is_object_id, validate_category_payload

logger = logging.getLogger(__name__)


async def list_categories_svc(categories: CategoryRepo) -> List[Dict[str, Any]]:
    return [c.transform() for c in await categories.list_all()]


async def get_category_svc(categories: CategoryRepo, category_id: str) -> Dict[str, Any]:
    if not is_object_id(category_id):
        raise InvalidIdentifier({"error": "categoryId is invalid"})
    category = await categories.get_by_id(category_id)
    if category is None:
        raise NotFound("Category not found")
    return category.transform()


async def create_category_svc(categories: CategoryRepo, payload: Any) -> Dict[str, Any]:
    name = validate_category_payload(payload)
    category = await categories.insert(name)
    logger.info("create_category ok id=%s name=%r", category.id, category.name)
    return category.transform()
