# jobs/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel

from scraper.fetcher import BASE_URL


class Settings(BaseModel):
    base_url: str = BASE_URL
    data_dir: Path = Path("data")
    log_dir: Path = Path("logs")
    concurrency: int = 10
    retries: int = 3
    backoff: float = 1.0
    environment: str = "development"

    @property
    def output_path(self) -> Path:
        return self.data_dir / "book-data.json"

    @property
    def assets_dir(self) -> Path:
        return self.data_dir / "assets"

    @property
    def console_logging(self) -> bool:
        return self.environment != "production"


def load_settings():
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv()
    return Settings(
        base_url=os.getenv("BASE_URL", BASE_URL),
        data_dir=os.getenv("DATA_DIR", "data"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        concurrency=os.getenv("CRAWL_CONCURRENCY", "10"),
        retries=os.getenv("CRAWL_RETRIES", "3"),
        backoff=os.getenv("CRAWL_BACKOFF", "1.0"),
        environment=os.getenv("APP_ENV", "development"),
    )
