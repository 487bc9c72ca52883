from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Patent Search API"
    DESCRIPTION: str = "Keyword search and similar-patent lookup over a patent corpus"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./patents.db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 5
    # e.g. "REPEATABLE READ" on PostgreSQL so count and page share one snapshot
    DATABASE_ISOLATION_LEVEL: Optional[str] = None

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:3000",
    ]

    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_SECONDS: float = 2.0
    STATS_INTERVAL: int = 100

    # Search
    DEFAULT_PAGE_SIZE: int = 10

    # Similarity
    SIMILARITY_TOP_N: int = 3
    SIMILARITY_MIN_SCORE: int = 2
    SIMILARITY_MIN_KEYWORD_LENGTH: int = 4
    SIMILARITY_STOP_WORDS: List[str] = [
        "a", "an", "the", "in", "on", "of", "for",
        "to", "with", "is", "was", "and", "or",
    ]

    SEED_FILE: str = "data/mock-patents.json"

    class Config:
        env_file = ".env"


settings = Settings()
