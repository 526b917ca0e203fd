from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Product Transactions API"
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "*"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def parsed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # MongoDB settings
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "mern_challenge"
    mongo_collection: str = "transactions"

    # Remote dataset used by /api/seed
    seed_url: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    seed_timeout_seconds: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
