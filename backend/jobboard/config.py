from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/jobboard.db"
    secret_key: str = "dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Redis configuration
    redis_url: str = "redis://localhost:6379"
    taxonomy_cache_ttl: int = 300  # seconds

    # Blob storage (share images)
    blob_storage_url: str = "http://localhost:9000/blobs"
    blob_storage_token: str = ""
    blob_storage_timeout: float = 30.0

    # Listing defaults
    default_page_size: int = 10
    max_page_size: int = 100
    similar_jobs_limit: int = 3

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
