"""Published, read-only view of validated content.

A ContentSnapshot bundles one frozen manifest with the level set validated
against it. SnapshotStore holds the current snapshot; publishing replaces the
single reference under a lock, so readers observe either the previous or the
new snapshot, never a mix of the two.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .model.base import LevelDefinition, ResolvedMaterial
from .registry import MaterialManifest
from .resolver import ProfileResolver

__all__ = ["ContentSnapshot", "SnapshotStore"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentSnapshot:
    manifest: MaterialManifest
    levels: Mapping[int, LevelDefinition]
    # level number -> slot -> material
    materials: Mapping[int, Mapping[str, ResolvedMaterial]]
    generation: int = 0

    @classmethod
    def build(
        cls,
        manifest: MaterialManifest,
        levels: Iterable[LevelDefinition],
        materials: Dict[int, Dict[str, ResolvedMaterial]],
        generation: int = 0,
    ) -> "ContentSnapshot":
        return cls(
            manifest=manifest,
            levels=MappingProxyType({lvl.number: lvl for lvl in levels}),
            materials=MappingProxyType({n: MappingProxyType(dict(m)) for n, m in materials.items()}),
            generation=generation,
        )

    def level(self, number: int) -> Optional[LevelDefinition]:
        return self.levels.get(number)

    def level_numbers(self):
        return sorted(self.levels)

    def presentation_materials(self, number: int) -> Mapping[str, ResolvedMaterial]:
        return self.materials.get(number, MappingProxyType({}))

    def resolve(self, profile_id: str) -> ResolvedMaterial:
        """Resolve on demand; unknown ids raise UnknownProfile like at load time."""
        return ProfileResolver(self.manifest).resolve(profile_id)


class SnapshotStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._current: Optional[ContentSnapshot] = None
        self._generation = 0

    def current(self) -> Optional[ContentSnapshot]:
        return self._current

    def publish(self, snapshot: ContentSnapshot) -> ContentSnapshot:
        with self._lock:
            self._generation += 1
            snapshot = replace(snapshot, generation=self._generation)
            self._current = snapshot
        logger.info(
            "Published content generation %d: %d levels, %d profiles",
            snapshot.generation, len(snapshot.levels), len(snapshot.manifest),
        )
        return snapshot
