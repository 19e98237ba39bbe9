from jwtkit.services.auth_service import AuthService, AuthUser, build_token_generator
from jwtkit.services.generator import TokenGenerator

__all__ = ["AuthService", "AuthUser", "TokenGenerator", "build_token_generator"]
