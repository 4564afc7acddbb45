from routers.settings import router as settings_router
from routers.customizations import router as customizations_router
from routers.products import router as products_router
from routers.orders import router as orders_router
from routers.webhooks import router as webhooks_router

__all__ = [
    "settings_router",
    "customizations_router",
    "products_router",
    "orders_router",
    "webhooks_router"
]
