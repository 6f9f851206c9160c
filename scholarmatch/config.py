"""Configuration management for ScholarMatch."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel

# Default paths
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_DB_PATH = DATA_DIR / "scholarmatch.db"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.yaml"
LOG_PATH = DATA_DIR / "scholarmatch.log"

# Household income below this (USD/year) demonstrates financial need
FINANCIAL_NEED_INCOME_THRESHOLD = 50000

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class Settings(BaseModel):
    """Runtime settings read from the environment."""

    database_url: str = f"sqlite:///{DEFAULT_DB_PATH}"
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    log_level: str = "INFO"

    @property
    def explanations_enabled(self) -> bool:
        return bool(self.openai_api_key)


def ensure_data_dir() -> None:
    """Ensure the data directory exists."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_settings() -> Settings:
    """Load settings from environment variables.

    Call ``dotenv.load_dotenv()`` first if a .env file should be honoured.
    """
    return Settings(
        database_url=os.getenv("DATABASE_URL") or f"sqlite:///{DEFAULT_DB_PATH}",
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        log_level=(os.getenv("SCHOLARMATCH_LOG_LEVEL") or "INFO").upper(),
    )


def load_catalog(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load raw scholarship entries from a YAML catalog file.

    Args:
        path: Optional path to the catalog. Defaults to data/catalog.yaml.

    Returns:
        List of scholarship dictionaries. Empty if the file doesn't exist.

    Raises:
        ValueError: If the file does not hold a list of scholarships.
    """
    if path is None:
        path = DEFAULT_CATALOG_PATH

    if not path.exists():
        return []

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return []

    # Accept either a bare list or {"scholarships": [...]}
    if isinstance(data, dict):
        data = data.get("scholarships", [])

    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must contain a list of scholarships")

    return data
