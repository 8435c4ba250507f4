"""Configurazione centrale per Brickgrid.

Qui centralizziamo i parametri modificabili del contenuto di livello (griglia,
piano di gioco, percorsi degli asset, categorie di profili obbligatorie,
logging). Tutti i valori hanno un default sensato e possono essere
sovrascritti via variabili d'ambiente.
"""
from __future__ import annotations
import logging
import os
from typing import Tuple


def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_float_env(name: str, default: float, minval: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = float(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


# ---------------- Griglia ----------------
# Dimensioni della matrice di ogni livello (colonne x righe)
DEFAULT_GRID_WIDTH: int = 20
DEFAULT_GRID_HEIGHT: int = 20

# Piano di gioco in unità mondo (asse Z = larghezza, asse X = altezza)
DEFAULT_PLANE_WIDTH: float = 40.0
DEFAULT_PLANE_HEIGHT: float = 30.0


def get_grid_size() -> Tuple[int, int]:
    """Ritorna (width, height). Var: BG_GRID_WIDTH / BG_GRID_HEIGHT (>= 1)."""
    return (
        _get_int_env("BG_GRID_WIDTH", DEFAULT_GRID_WIDTH, minval=1),
        _get_int_env("BG_GRID_HEIGHT", DEFAULT_GRID_HEIGHT, minval=1),
    )


def get_plane_size() -> Tuple[float, float]:
    """Ritorna (plane_width, plane_height). Var: BG_PLANE_WIDTH / BG_PLANE_HEIGHT."""
    return (
        _get_float_env("BG_PLANE_WIDTH", DEFAULT_PLANE_WIDTH, minval=0.001),
        _get_float_env("BG_PLANE_HEIGHT", DEFAULT_PLANE_HEIGHT, minval=0.001),
    )


# ---------------- Asset ----------------
ASSETS_DIR_DEFAULT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")


def get_assets_dir() -> str:
    return os.getenv("BG_ASSETS_DIR", ASSETS_DIR_DEFAULT).strip()


def get_levels_dir() -> str:
    """Directory dei file level_*.json. Var: BG_LEVELS_DIR (default <assets>/levels)."""
    return os.getenv("BG_LEVELS_DIR", os.path.join(get_assets_dir(), "levels")).strip()


def get_manifest_path() -> str:
    """Percorso del manifest dei materiali. Var: BG_MANIFEST_PATH."""
    default = os.path.join(get_assets_dir(), "textures", "manifest.json")
    return os.getenv("BG_MANIFEST_PATH", default).strip()


# ---------------- Validazione ----------------
# Categorie che devono avere almeno un profilo risolvibile direttamente
DEFAULT_REQUIRED_CATEGORIES: Tuple[str, ...] = ("ground",)


def get_required_categories() -> Tuple[str, ...]:
    """Var: BG_REQUIRED_CATEGORIES, lista separata da virgole ("" = nessuna)."""
    raw = os.getenv("BG_REQUIRED_CATEGORIES")
    if raw is None:
        return DEFAULT_REQUIRED_CATEGORIES
    return tuple(c.strip() for c in raw.split(",") if c.strip())


def get_normalize_levels() -> bool:
    """Pad/truncate delle matrici al caricamento (default False). Var: BG_NORMALIZE_LEVELS."""
    return _get_bool_env("BG_NORMALIZE_LEVELS", False)


# ---------------- Logging ----------------
DEFAULT_LOG_LEVEL = "INFO"


def get_log_level() -> int:
    name = os.getenv("BG_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    # Griglia
    "DEFAULT_GRID_WIDTH", "DEFAULT_GRID_HEIGHT", "DEFAULT_PLANE_WIDTH", "DEFAULT_PLANE_HEIGHT",
    "get_grid_size", "get_plane_size",
    # Asset
    "get_assets_dir", "get_levels_dir", "get_manifest_path",
    # Validazione
    "DEFAULT_REQUIRED_CATEGORIES", "get_required_categories", "get_normalize_levels",
    # Logging
    "get_log_level", "configure_logging",
]
