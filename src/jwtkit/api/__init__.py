from jwtkit.api.dependencies import get_auth_service
from jwtkit.api.routes import router

__all__ = ["get_auth_service", "router"]
