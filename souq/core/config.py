from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    # App
    APP_NAME: str = Field("Souq Platform")
    APP_ENV: str = Field("development")
    APP_HOST: str = Field("0.0.0.0")
    APP_PORT: int = Field(8000)
    LOG_LEVEL: str = Field("INFO")

    # Database (local fallback store + users)
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("postgres")
    DB_PASSWORD: str = Field("postgres")
    DB_NAME: str = Field("postgres")
    # overrides the granular settings above, e.g. sqlite:///./souq_local.db
    LOCAL_DB_URL: Optional[str] = Field(None)

    # Firebase
    FIREBASE_ENABLED: bool = Field(False)
    FIREBASE_AUTH_ENABLED: bool = Field(False)
    FIREBASE_CREDENTIALS_PATH: Optional[str] = Field(None)
    FIREBASE_PROJECT_ID: Optional[str] = Field(None)

    # JWT / Auth
    SECRET_KEY: str = Field("defaultsecret")
    ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60)
    FALLBACK_AUTH_ENABLED: bool = Field(True)

    # Storefront
    STOREFRONT_WAIT_SECONDS: float = Field(5.0)
    STOREFRONT_POLL_INTERVAL: float = Field(0.5)
    STOREFRONT_FALLBACK_TO_FIRST: bool = Field(True)

    # Sync
    SYNC_HISTORY_SIZE: int = Field(100)

    # Seeding
    SEED_SAMPLE_DATA: bool = Field(False)

    # SUPABASE
    SUPABASE_URL: Optional[str] = Field(None)
    SUPABASE_KEY: Optional[str] = Field(None)
    SUPABASE_BUCKET: str = Field("store_assets")
    UPLOAD_RETRIES: int = Field(3)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


settings = Settings()
