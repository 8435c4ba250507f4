"""Data model definitions for levels and material profiles (Brickgrid).

This module only contains pure dataclasses and enums without loading or
validation logic. They are intended to be immutable structural
representations of level and manifest content.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, Optional, Tuple

__all__ = [
    "GridDimensions",
    "CellType",
    "Color",
    "PresentationBlock",
    "LevelDefinition",
    "MaterialProfile",
    "ResolvedMaterial",
    "AnimationDescriptor",
    "TypeVariant",
    "LevelSwitchState",
    "PROFILE_SLOTS",
]

# RGBA, components in [0, 1]
Color = Tuple[float, float, float, float]

# Presentation slots in resolution order
PROFILE_SLOTS: Tuple[str, ...] = ("ground_profile", "background_profile", "sidewall_profile")


@dataclass(frozen=True)
class GridDimensions:
    width: int
    height: int

    @property
    def cell_count(self) -> int:
        return self.width * self.height


class CellType(IntEnum):
    """Tile kinds as they appear in level matrices."""
    EMPTY = 0
    PADDLE = 1
    BALL = 2
    BRICK = 3  # legacy simple brick, new levels use SIMPLE_BRICK
    MULTI_HIT_1 = 10
    MULTI_HIT_2 = 11
    MULTI_HIT_3 = 12
    MULTI_HIT_4 = 13
    SIMPLE_BRICK = 20
    EXTRA_LIFE = 41
    PADDLE_DESTROYABLE = 57
    INDESTRUCTIBLE = 90

    @property
    def is_multi_hit(self) -> bool:
        return CellType.MULTI_HIT_1 <= self <= CellType.MULTI_HIT_4

    @property
    def is_brick(self) -> bool:
        return self not in (CellType.EMPTY, CellType.PADDLE, CellType.BALL)

    @property
    def counts_toward_completion(self) -> bool:
        return self.is_brick and self is not CellType.INDESTRUCTIBLE


@dataclass(frozen=True)
class PresentationBlock:
    level_number: int
    ground_profile: Optional[str] = None
    background_profile: Optional[str] = None
    sidewall_profile: Optional[str] = None
    tint: Optional[Color] = None
    notes: Optional[str] = None

    def profile_slots(self) -> Iterator[Tuple[str, str]]:
        """Yield (slot, reference) for every declared profile reference."""
        for slot in PROFILE_SLOTS:
            ref = getattr(self, slot)
            if ref is not None:
                yield slot, ref


@dataclass(frozen=True)
class LevelDefinition:
    number: int
    matrix: Tuple[Tuple[CellType, ...], ...]
    presentation: Optional[PresentationBlock] = None
    gravity: Optional[Tuple[float, float, float]] = None

    @property
    def rows(self) -> int:
        return len(self.matrix)

    def cell(self, row: int, col: int) -> CellType:
        return self.matrix[row][col]

    def cells_of(self, kind: CellType) -> Iterator[Tuple[int, int]]:
        for r, row in enumerate(self.matrix):
            for c, value in enumerate(row):
                if value is kind:
                    yield r, c

    def completion_brick_count(self) -> int:
        return sum(1 for row in self.matrix for value in row if value.counts_toward_completion)


@dataclass(frozen=True)
class MaterialProfile:
    id: str
    albedo_path: str = ""
    normal_path: Optional[str] = None
    roughness: float = 0.5
    metallic: float = 0.0
    uv_scale: Tuple[float, float] = (1.0, 1.0)
    uv_offset: Tuple[float, float] = (0.0, 0.0)
    fallback_chain: Tuple[str, ...] = ()

    @property
    def is_directly_resolvable(self) -> bool:
        return bool(self.albedo_path)

    @property
    def category(self) -> str:
        return self.id.split("/", 1)[0]


@dataclass(frozen=True)
class ResolvedMaterial:
    """Renderable parameters taken from exactly one profile."""
    requested_id: str
    source_id: str
    albedo_path: str
    normal_path: Optional[str]
    roughness: float
    metallic: float
    uv_scale: Tuple[float, float]
    uv_offset: Tuple[float, float]

    @classmethod
    def from_profile(cls, profile: MaterialProfile, requested_id: Optional[str] = None) -> "ResolvedMaterial":
        return cls(
            requested_id=requested_id or profile.id,
            source_id=profile.id,
            albedo_path=profile.albedo_path,
            normal_path=profile.normal_path,
            roughness=profile.roughness,
            metallic=profile.metallic,
            uv_scale=profile.uv_scale,
            uv_offset=profile.uv_offset,
        )

    @property
    def used_fallback(self) -> bool:
        return self.requested_id != self.source_id


@dataclass(frozen=True)
class AnimationDescriptor:
    kind: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TypeVariant:
    """Per tile-type material override (e.g. Brick type 20 -> brick/stone)."""
    object_class: str
    type_id: int
    profile_id: str
    emissive_color: Optional[Color] = None
    animation: Optional[AnimationDescriptor] = None


@dataclass(frozen=True)
class LevelSwitchState:
    ordered_levels: Tuple[int, ...] = ()
