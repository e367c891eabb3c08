"""API route modules."""

from scaffold_finance.api.routes.health import router as health_router
from scaffold_finance.api.routes.payroll import router as payroll_router
from scaffold_finance.api.routes.projects import router as projects_router

__all__ = ["health_router", "payroll_router", "projects_router"]
