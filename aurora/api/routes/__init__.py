"""API route modules."""

from aurora.api.routes.clients import router as clients_router
from aurora.api.routes.contractors import router as contractors_router
from aurora.api.routes.dashboard import router as dashboard_router
from aurora.api.routes.health import router as health_router
from aurora.api.routes.notifications import router as notifications_router
from aurora.api.routes.orders import router as orders_router
from aurora.api.routes.products import router as products_router
from aurora.api.routes.raw_materials import router as raw_materials_router
from aurora.api.routes.tasks import router as tasks_router
from aurora.api.routes.thread_inventory import router as thread_inventory_router
from aurora.api.routes.workers import router as workers_router

__all__ = [
    "health_router",
    "raw_materials_router",
    "thread_inventory_router",
    "clients_router",
    "products_router",
    "contractors_router",
    "workers_router",
    "orders_router",
    "tasks_router",
    "notifications_router",
    "dashboard_router",
]
