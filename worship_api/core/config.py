# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "worship-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "3000"))

    # Auth
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-worship-jwt-secret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_HOURS: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))
    PASSWORD_HASH_ITERATIONS: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    # Seed
    SEED_DEFAULT_DATA: bool = os.getenv("SEED_DEFAULT_DATA", "true").lower() == "true"
    SEED_DEFAULT_PASSWORD: str = os.getenv("SEED_DEFAULT_PASSWORD", "123456")

    # Rate Limiting (100 requests per 15 minutes per client IP)
    RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))
    RATE_LIMIT_ENABLED: bool = RATE_LIMIT_MAX_REQUESTS > 0
    RATE_LIMIT_BYPASS: set = {"/health", "/health/ready", "/metrics"}

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
