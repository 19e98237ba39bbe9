from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str = "change-me-in-env"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "jwtkit"
    jwt_allowed_issuers: tuple[str, ...] = ()
    jwt_max_age_seconds: int = 3600 * 24
    jwt_private_key_path: str | None = None
    jwt_public_key_path: str | None = None
    api_auth_enabled: bool = True
    api_auth_username: str = "admin"
    api_auth_password: str = "change-me"


def _strip_wrapping_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_dotenv_if_present() -> None:
    env_paths = [
        Path.cwd() / ".env",
        Path(__file__).resolve().parents[3] / ".env",
    ]
    for env_path in env_paths:
        if not env_path.exists():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = _strip_wrapping_quotes(value.strip())
            if key:
                os.environ.setdefault(key, value)
        break


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def get_settings() -> Settings:
    _load_dotenv_if_present()
    return Settings(
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change-me-in-env"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256").strip().upper(),
        jwt_issuer=os.getenv("JWT_ISSUER", "jwtkit"),
        jwt_allowed_issuers=_env_list("JWT_ALLOWED_ISSUERS"),
        jwt_max_age_seconds=int(os.getenv("JWT_MAX_AGE_SECONDS", str(3600 * 24))),
        jwt_private_key_path=_env_optional("JWT_PRIVATE_KEY_PATH"),
        jwt_public_key_path=_env_optional("JWT_PUBLIC_KEY_PATH"),
        api_auth_enabled=_env_bool("API_AUTH_ENABLED", True),
        api_auth_username=os.getenv("API_AUTH_USERNAME", "admin"),
        api_auth_password=os.getenv("API_AUTH_PASSWORD", "change-me"),
    )


get_settings = lru_cache(maxsize=1)(get_settings)


def clear_settings_cache() -> None:
    get_settings.cache_clear()  # type: ignore[attr-defined]
