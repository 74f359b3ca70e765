# company_api/config.py
from pydantic_settings import BaseSettings
from typing import Optional
from urllib.parse import quote_plus


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    APP_NAME: str = "Company Profile API"
    APP_VERSION: str = "1.0.0"
    PORT: int = 3000

    # Database - either a single URL or discrete PG* settings
    DATABASE_URL: Optional[str] = None
    PGHOST: str = "localhost"
    PGPORT: int = 5432
    PGUSER: str = "postgres"
    PGPASSWORD: str = "postgres"
    PGDATABASE: str = "company_db"
    PGSSLMODE: Optional[str] = None

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 10
    DB_CONNECT_TIMEOUT: int = 10

    # JWT
    JWT_SECRET: str = "dev_secret_change_me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_DAYS: int = 90

    # CORS - as string, will be parsed to list
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Image hosting: "cloudinary", "s3" or "mock"
    ASSET_PROVIDER: str = "cloudinary"
    ASSET_FOLDER: str = "company-module"
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None

    # AWS (S3 image hosting)
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    ASSETS_BUCKET: str = "local-company-assets"

    # Identity provider (Firebase)
    USE_MOCK_AUTH: bool = False
    FIREBASE_SERVICE_ACCOUNT: str = ""
    FIREBASE_PROJECT_ID: str = ""

    # External calls and uploads
    EXTERNAL_CALL_TIMEOUT: float = 15.0
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    @property
    def cors_origins_list(self) -> list:
        return [x.strip() for x in self.CORS_ORIGINS.split(',') if x.strip()]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL

        url = (
            f"postgresql+psycopg2://{quote_plus(self.PGUSER)}:{quote_plus(self.PGPASSWORD)}"
            f"@{self.PGHOST}:{self.PGPORT}/{self.PGDATABASE}"
        )
        if self.PGSSLMODE == "require" or self.ENVIRONMENT == "production":
            url += "?sslmode=require"
        return url

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
