import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables
load_dotenv()


DEFAULT_GROQ_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"


class Settings(BaseModel):
    database_url: str = ""
    database_key: str = ""
    groq_api_key: str = ""
    groq_model: str = DEFAULT_GROQ_MODEL
    app_env: str = "development"
    serverless: bool = False
    static_dir: str = "dist"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: str = "*"

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url)

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """
    Read settings from the process environment (after .env has been loaded).
    """
    return Settings(
        database_url=os.getenv("DATABASE_URL") or os.getenv("db") or "",
        database_key=os.getenv("DATABASE_KEY", ""),
        groq_api_key=os.getenv("GROQ_API_KEY") or os.getenv("groq_api_key") or "",
        groq_model=os.getenv("GROQ_MODEL") or DEFAULT_GROQ_MODEL,
        app_env=os.getenv("APP_ENV", "development"),
        serverless=os.getenv("VERCEL") == "1",
        static_dir=os.getenv("STATIC_DIR", "dist"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
    )
