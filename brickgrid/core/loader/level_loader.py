"""Level loading utilities.

Separates construction logic from raw JSON (dict) into model dataclasses.
Matrix dimensions are NOT enforced here: a level with the wrong shape still
builds, and LevelValidator rejects it with DimensionMismatch. Authoring tools
that want to repair a matrix call normalize_matrix explicitly.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from config import get_normalize_levels
from ...errors import InvalidCellToken, MalformedContent
from ..grid import default_dimensions
from ..model.base import CellType, Color, GridDimensions, LevelDefinition, PresentationBlock
from ..schema import LEVEL_SCHEMA
from .documents import check_document, read_document

__all__ = [
    "build_level_from_dict",
    "build_presentation",
    "parse_color",
    "normalize_matrix",
    "NormalizationMetrics",
    "NormalizationResult",
    "load_level_file",
    "load_levels_dir",
    "LEVEL_GLOB",
]

logger = logging.getLogger(__name__)

LEVEL_GLOB = "level_*.json"


def parse_color(raw: Optional[Sequence[float]]) -> Optional[Color]:
    if raw is None:
        return None
    r, g, b = (float(v) for v in raw[:3])
    a = float(raw[3]) if len(raw) > 3 else 1.0
    return (r, g, b, a)


def build_presentation(data: Dict[str, Any]) -> PresentationBlock:
    return PresentationBlock(
        level_number=data["level_number"],
        ground_profile=data.get("ground_profile"),
        background_profile=data.get("background_profile"),
        sidewall_profile=data.get("sidewall_profile"),
        tint=parse_color(data.get("tint")),
        notes=data.get("notes"),
    )


def _parse_row(raw_row: Sequence[int], row: int, level_number: Optional[int]) -> Tuple[CellType, ...]:
    cells = []
    for col, token in enumerate(raw_row):
        try:
            cells.append(CellType(token))
        except ValueError:
            raise InvalidCellToken(token, row, col, level_number) from None
    return tuple(cells)


def build_level_from_dict(data: Dict[str, Any], source: str = "<level>", normalize: Optional[bool] = None) -> LevelDefinition:
    check_document(data, LEVEL_SCHEMA, source)
    number = data["number"]
    raw_matrix: List[List[int]] = data["matrix"]
    if normalize is None:
        normalize = get_normalize_levels()
    if normalize:
        raw_matrix = normalize_matrix(raw_matrix).matrix
    matrix = tuple(_parse_row(r, i, number) for i, r in enumerate(raw_matrix))
    presentation_data = data.get("presentation")
    gravity = data.get("gravity")
    return LevelDefinition(
        number=number,
        matrix=matrix,
        presentation=build_presentation(presentation_data) if presentation_data else None,
        gravity=tuple(float(v) for v in gravity) if gravity is not None else None,
    )


@dataclass
class NormalizationMetrics:
    padded_rows: int = 0
    truncated_rows: int = 0
    padded_cols: int = 0  # cumulative over all rows
    truncated_cols: int = 0

    @property
    def changed(self) -> bool:
        return any((self.padded_rows, self.truncated_rows, self.padded_cols, self.truncated_cols))


@dataclass
class NormalizationResult:
    matrix: List[List[int]]
    metrics: NormalizationMetrics = field(default_factory=NormalizationMetrics)


def normalize_matrix(matrix: Sequence[Sequence[int]], dims: Optional[GridDimensions] = None) -> NormalizationResult:
    """Pad with EMPTY / truncate a raw matrix to the grid size.

    Rows added as padding are created full width and are not counted in
    ``padded_cols``.
    """
    if dims is None:
        dims = default_dimensions()
    metrics = NormalizationMetrics()
    rows = [list(r) for r in matrix]

    original_rows = len(rows)
    original_cols = len(rows[0]) if rows else 0
    if original_rows != dims.height or original_cols != dims.width:
        logger.warning(
            "Level matrix wrong dimensions; expected %dx%d, got %dx%d",
            dims.width, dims.height, original_cols, original_rows,
        )

    if len(rows) < dims.height:
        metrics.padded_rows = dims.height - len(rows)
        rows.extend([int(CellType.EMPTY)] * dims.width for _ in range(metrics.padded_rows))
    elif len(rows) > dims.height:
        metrics.truncated_rows = len(rows) - dims.height
        del rows[dims.height:]

    for i, row in enumerate(rows):
        if len(row) < dims.width:
            metrics.padded_cols += dims.width - len(row)
            row.extend([int(CellType.EMPTY)] * (dims.width - len(row)))
        elif len(row) > dims.width:
            metrics.truncated_cols += len(row) - dims.width
            logger.warning("Row %d has %d columns; truncating to %d", i, len(row), dims.width)
            del row[dims.width:]

    return NormalizationResult(matrix=rows, metrics=metrics)


def load_level_file(path: Union[str, Path], normalize: Optional[bool] = None) -> LevelDefinition:
    data = read_document(path)
    return build_level_from_dict(data, source=str(path), normalize=normalize)


def load_levels_dir(path: Union[str, Path], normalize: Optional[bool] = None) -> List[LevelDefinition]:
    """Load every level_*.json in path, sorted by filename.

    A missing directory or one without level files is an error: an empty
    level set is never a valid batch.
    """
    levels_dir = Path(path)
    if not levels_dir.is_dir():
        raise MalformedContent(str(levels_dir), "levels directory not found")
    files = sorted(levels_dir.glob(LEVEL_GLOB))
    if not files:
        raise MalformedContent(str(levels_dir), f"no {LEVEL_GLOB} files")
    return [load_level_file(p, normalize=normalize) for p in files]
