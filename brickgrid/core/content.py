"""Facade for the level/material content model.

Re-exports dataclasses, loaders, resolver and validator from the internal
modules to provide a stable import surface.
"""
from .model.base import (
    CellType,
    GridDimensions,
    LevelDefinition,
    LevelSwitchState,
    MaterialProfile,
    PresentationBlock,
    ResolvedMaterial,
    TypeVariant,
)
from .grid import cell_center, cell_size, centered_cell_center, default_dimensions, grid_line_positions
from .loader.level_loader import build_level_from_dict, load_level_file, load_levels_dir, normalize_matrix
from .loader.manifest_loader import build_manifest_from_dict, load_manifest_file
from .registry import MaterialManifest
from .resolver import ProfileResolver
from .snapshot import ContentSnapshot, SnapshotStore
from .validator import LevelValidator, effective_presentation

__all__ = [
    "CellType",
    "GridDimensions",
    "LevelDefinition",
    "LevelSwitchState",
    "MaterialProfile",
    "PresentationBlock",
    "ResolvedMaterial",
    "TypeVariant",
    "cell_center",
    "cell_size",
    "centered_cell_center",
    "grid_line_positions",
    "default_dimensions",
    "build_level_from_dict",
    "load_level_file",
    "load_levels_dir",
    "normalize_matrix",
    "build_manifest_from_dict",
    "load_manifest_file",
    "MaterialManifest",
    "ProfileResolver",
    "ContentSnapshot",
    "SnapshotStore",
    "LevelValidator",
    "effective_presentation",
]
