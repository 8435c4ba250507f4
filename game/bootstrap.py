"""Bootstrap utilities: load manifest + levels from assets and publish a snapshot."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from brickgrid.core.snapshot import ContentSnapshot
from brickgrid.core.validator import LevelValidator
from brickgrid.errors import ContentError
from config import get_levels_dir, get_manifest_path

logger = logging.getLogger(__name__)

_validator: Optional[LevelValidator] = None


def get_validator() -> LevelValidator:
    global _validator
    if _validator is None:
        _validator = LevelValidator()
    return _validator


def load_content(
    manifest_path: Union[str, Path, None] = None,
    levels_dir: Union[str, Path, None] = None,
    validator: Optional[LevelValidator] = None,
) -> ContentSnapshot:
    """Load, validate and publish. Raises ContentError; nothing is published on failure."""
    validator = validator or get_validator()
    manifest_path = manifest_path or get_manifest_path()
    levels_dir = levels_dir or get_levels_dir()
    logger.info("Loading material manifest %s", manifest_path)
    snapshot = validator.load_from_paths(manifest_path, levels_dir)
    logger.info("-- Caricati %d livelli, %d profili --", len(snapshot.levels), len(snapshot.manifest))
    return snapshot


def reload_content(validator: Optional[LevelValidator] = None) -> Optional[ContentSnapshot]:
    """Hot reload: on failure keep serving the previous snapshot and return it."""
    validator = validator or get_validator()
    try:
        return load_content(validator=validator)
    except ContentError as e:
        logger.warning("Reload failed, retaining generation %s: %s",
                       validator.current.generation if validator.current else None, e)
        return validator.current
