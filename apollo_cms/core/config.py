from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "Apollo CMS"

    ADMIN_JWT_TTL_MINUTES: int = 240
    ADMIN_JWT_SECRET: str = "change_me_admin"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:9002"

    DATABASE_URL: str = "sqlite+pysqlite:///./apollo_cms.db"

    S3_ENDPOINT: str = "http://localhost:9000"
    S3_ACCESS_KEY: str = "change_me"
    S3_SECRET_KEY: str = "change_me"
    S3_BUCKET: str = "apollo-media"
    S3_REGION: str = "us-east-1"
    S3_USE_SSL: bool = False
    MAX_FILE_MB: int = 25

    LLM_API_URL: str = "https://api.openai.com/v1"
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 60.0

    GA_PROPERTY_ID: str = ""
    GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING: str = ""
    GA_TIMEOUT_SECONDS: float = 15.0

    SCHEMA_MAX_DEPTH: int = 5
    SLUG_CHECK_DEBOUNCE_SECONDS: float = 0.5

    ADMIN_BOOTSTRAP_ENABLED: bool = True
    ADMIN_BOOTSTRAP_EMAIL: str = "admin@example.com"
    ADMIN_BOOTSTRAP_PASSWORD: str = "admin123"
    ADMIN_BOOTSTRAP_NAME: str = "Administrator"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
