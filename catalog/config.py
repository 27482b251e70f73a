import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

# Development fallback only; set API_KEY in any shared environment.
DEFAULT_API_KEY = "your-secret-api-key-123"


class Settings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000
    api_key: str = DEFAULT_API_KEY
    log_level: str = "INFO"
    allowed_origins: List[str] = ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        raw_origins = os.getenv("ALLOWED_ORIGINS", "*")
        allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        return cls(
            host=os.getenv("HOST", "127.0.0.1"),
            port=os.getenv("PORT", "3000"),
            api_key=os.getenv("API_KEY") or DEFAULT_API_KEY,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            allowed_origins=allowed_origins or ["*"],
        )

# Create a single, shared instance for the whole application to use
settings = Settings.from_env()
