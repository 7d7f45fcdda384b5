"""Catalog document loading, validated once at startup."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from villager_gen.catalog.schemas import FollowerCatalog
from villager_gen.errors import StartupLoadError

logger = logging.getLogger(__name__)

_BUNDLED_CATALOG: FollowerCatalog | None = None
_DATA_PATH = Path(__file__).parent / "follower_data.json"


def read_document(path: Path) -> dict[str, Any]:
    """Read the raw JSON document, mapping IO and parse failures to StartupLoadError."""
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise StartupLoadError(f"Catalog not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise StartupLoadError(f"Could not read catalog {path}: {e}") from e

    if not isinstance(document, dict):
        raise StartupLoadError(f"Catalog {path} must be a JSON object, got {type(document).__name__}")
    return document


def parse_catalog(document: dict[str, Any], source: str = "<document>") -> FollowerCatalog:
    """Validate a raw document against the catalog schema."""
    try:
        catalog = FollowerCatalog.model_validate(document)
    except ValidationError as e:
        raise StartupLoadError(f"Malformed catalog {source}: {e}") from e

    logger.info(
        "Loaded catalog %s: %d forms, %d clothing, %d general color sets",
        source,
        len(catalog.forms),
        len(catalog.clothing),
        len(catalog.general_color_sets),
    )
    return catalog


def load_catalog(path: Path | None = None) -> FollowerCatalog:
    """Load a catalog from ``path``, or the bundled catalog (cached) when None."""
    global _BUNDLED_CATALOG
    if path is None:
        if _BUNDLED_CATALOG is None:
            _BUNDLED_CATALOG = parse_catalog(read_document(_DATA_PATH), str(_DATA_PATH))
        return _BUNDLED_CATALOG
    return parse_catalog(read_document(path), str(path))


def require_clothing(catalog: FollowerCatalog, clothing_id: str) -> None:
    """Fail startup when the fixed default clothing entry is missing."""
    if clothing_id not in catalog.clothing:
        raise StartupLoadError(
            f"Default clothing {clothing_id!r} not in catalog "
            f"(available: {', '.join(sorted(catalog.clothing)) or 'none'})"
        )
