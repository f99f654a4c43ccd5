from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.core.config import get_settings
from catalog.core.errors import install_error_handlers
from catalog.core.lifespan import lifespan
from catalog.core.logging import configure_logging, resolve_level
from catalog.api.v1.routers.categories import router as categories_router
from catalog.api.v1.routers.health import router as health_router
from catalog.api.v1.routers.products import router as products_router

settings = get_settings()
configure_logging(level=resolve_level(settings.LOG_LEVEL, settings.DEBUG))

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS="https://shop.example.com,https://admin.example.com"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["http://localhost:3000"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
install_error_handlers(app)

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router)
app.include_router(categories_router)
