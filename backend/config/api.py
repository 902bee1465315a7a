"""
Django Ninja API configuration.
"""

from django.http import HttpRequest
from ninja import NinjaAPI

from apps.accounts.api import router as users_router
from apps.audit.api import router as audit_router
from apps.equipment.api import router as equipment_router
from apps.inspections.api import router as inspections_router
from apps.notifications.api import router as notifications_router
from apps.taxonomies.api import router as dropdowns_router

api = NinjaAPI(
    title="Inspection Records API",
    version="1.0.0",
    description="Equipment inspection records with Stytch authentication.",
    openapi_extra={
        "info": {
            "contact": {"name": "API Support"},
        },
        "tags": [
            {"name": "users", "description": "User profiles, administration and complete deletion"},
            {"name": "audit", "description": "Audit log of administrative actions"},
            {"name": "equipment", "description": "Equipment registry"},
            {"name": "inspections", "description": "Inspection records and photos"},
            {"name": "notifications", "description": "In-app notifications"},
            {"name": "settings", "description": "Configurable dropdown options"},
            {"name": "health", "description": "Service health and readiness checks"},
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                    "description": "Stytch session JWT. Include as: Authorization: Bearer <session_jwt>",
                }
            }
        },
    },
)

# Register routers
api.add_router("/users", users_router)
api.add_router("/audit-logs", audit_router)
api.add_router("/equipment", equipment_router)
api.add_router("/inspections", inspections_router)
api.add_router("/notifications", notifications_router)
api.add_router("/settings/dropdowns", dropdowns_router)


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
