# catalog/api/deps.py
from fastapi import Depends
from catalog.core.config import Settings, get_settings
from catalog.db.mongo import get_db
from catalog.domain.repositories.category_repo import CategoryRepo
from catalog.domain.repositories.product_repo import ProductRepo

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    return db

# Repositories are cheap wrappers; build one per request
def product_repo(db = Depends(mongo_db), settings: Settings = Depends(get_settings)) -> ProductRepo:
    return ProductRepo(db, settings.products_collection)

def category_repo(db = Depends(mongo_db), settings: Settings = Depends(get_settings)) -> CategoryRepo:
    return CategoryRepo(db, settings.categories_collection)
