"""Load a YAML scholarship catalog into the database."""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from scholarmatch.config import load_catalog
from scholarmatch.schemas import ScholarshipCreate
from scholarmatch.storage.repository import SqlMatchingStore

logger = logging.getLogger(__name__)


def parse_catalog(path: Optional[Path] = None) -> List[ScholarshipCreate]:
    """Read and validate every entry of a catalog file.

    Raises:
        ValueError: If any entry fails validation. The message names the entry.
    """
    entries = []
    for index, raw in enumerate(load_catalog(path)):
        try:
            entries.append(ScholarshipCreate.model_validate(raw))
        except ValidationError as e:
            ident = raw.get("id", f"#{index}") if isinstance(raw, dict) else f"#{index}"
            raise ValueError(f"Invalid catalog entry {ident}: {e}") from e
    return entries


def seed_catalog(store: SqlMatchingStore, path: Optional[Path] = None) -> int:
    """Insert or replace every scholarship from a catalog file.

    Returns:
        Number of scholarships written.
    """
    entries = parse_catalog(path)
    for entry in entries:
        store.add_scholarship(entry)
    logger.info(f"Seeded {len(entries)} scholarships from {path or 'default catalog'}")
    return len(entries)
