"""Batch validation of a manifest plus a level set.

LevelValidator is the only place where a violation aborts a whole load.
Checks run in a fixed order:

1. matrix shape (DimensionMismatch)
2. positive, unique level numbers (InvalidLevelNumber, DuplicateLevelNumber)
3. presentation level number matches its level (PresentationLevelMismatch)
4. every profile reference resolves (UnknownProfile, UnresolvedProfile,
   CyclicFallbackChain), including type variants; level_switch entries must
   name levels of the batch (UnknownLevelNumber)
5. each required category has a directly resolvable profile (NoDefaultProfile)

``validate`` stops at the first violation; ``check`` reports all of them in
the same order. ``publish`` validates and swaps the result into the store
only on success.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from config import get_required_categories
from ..errors import (
    ContentError,
    DimensionMismatch,
    DuplicateLevelNumber,
    InvalidLevelNumber,
    NoDefaultProfile,
    PresentationLevelMismatch,
    ResolutionError,
    UnknownLevelNumber,
)
from .grid import default_dimensions
from .loader.level_loader import build_level_from_dict, load_levels_dir
from .loader.manifest_loader import build_manifest_from_dict, load_manifest_file
from .model.base import GridDimensions, LevelDefinition, PresentationBlock, ResolvedMaterial
from .registry import MaterialManifest
from .resolver import ProfileResolver
from .snapshot import ContentSnapshot, SnapshotStore

__all__ = ["LevelValidator", "effective_presentation"]

logger = logging.getLogger(__name__)

Materials = Dict[int, Dict[str, ResolvedMaterial]]


def effective_presentation(level: LevelDefinition, manifest: MaterialManifest) -> Optional[PresentationBlock]:
    """The level's own presentation block, else the manifest override for it."""
    if level.presentation is not None:
        return level.presentation
    return manifest.level_override(level.number)


class LevelValidator:
    def __init__(
        self,
        dims: Optional[GridDimensions] = None,
        required_categories: Optional[Sequence[str]] = None,
        store: Optional[SnapshotStore] = None,
    ):
        self.dims = dims or default_dimensions()
        if required_categories is None:
            required_categories = get_required_categories()
        self.required_categories = tuple(required_categories)
        self.store = store if store is not None else SnapshotStore()

    # --- Individual checks ---
    def _check_dimensions(self, level: LevelDefinition) -> Optional[DimensionMismatch]:
        expected = (self.dims.width, self.dims.height)
        if len(level.matrix) != self.dims.height:
            return DimensionMismatch(level.number, expected, len(level.matrix))
        for i, row in enumerate(level.matrix):
            if len(row) != self.dims.width:
                return DimensionMismatch(level.number, expected, len(level.matrix), i, len(row))
        return None

    def _resolution_violations(
        self, manifest: MaterialManifest, levels: List[LevelDefinition], materials: Materials
    ) -> Iterator[ContentError]:
        resolver = ProfileResolver(manifest)
        for level in levels:
            block = effective_presentation(level, manifest)
            if block is None:
                continue
            resolved = materials.setdefault(level.number, {})
            for slot, ref in block.profile_slots():
                try:
                    resolved[slot] = resolver.resolve(ref)
                except ResolutionError as e:
                    yield e.annotate(level.number, slot)
        for variant in manifest.type_variants:
            try:
                resolver.resolve(variant.profile_id)
            except ResolutionError as e:
                yield e.annotate(None, f"type_variant {variant.object_class}:{variant.type_id}")
        if manifest.level_switch is not None:
            known = {lvl.number for lvl in levels}
            for number in manifest.level_switch.ordered_levels:
                if number not in known:
                    yield UnknownLevelNumber(number, "level_switch")

    def iter_violations(
        self,
        manifest: MaterialManifest,
        levels: Iterable[LevelDefinition],
        materials: Optional[Materials] = None,
    ) -> Iterator[ContentError]:
        levels = list(levels)
        if materials is None:
            materials = {}

        for level in levels:
            mismatch = self._check_dimensions(level)
            if mismatch is not None:
                yield mismatch

        seen = set()
        for level in levels:
            if not isinstance(level.number, int) or level.number < 1:
                yield InvalidLevelNumber(level.number)
            elif level.number in seen:
                yield DuplicateLevelNumber(level.number)
            seen.add(level.number)

        for level in levels:
            if level.presentation is not None and level.presentation.level_number != level.number:
                yield PresentationLevelMismatch(level.number, level.presentation.level_number)

        yield from self._resolution_violations(manifest, levels, materials)

        for category in self.required_categories:
            if not any(p.is_directly_resolvable for p in manifest.profiles_in(category)):
                yield NoDefaultProfile(category)

    # --- Modes ---
    def check(self, manifest: MaterialManifest, levels: Iterable[LevelDefinition]) -> List[ContentError]:
        """Report-all mode: every violation, in check order."""
        return list(self.iter_violations(manifest, levels))

    def validate(self, manifest: MaterialManifest, levels: Iterable[LevelDefinition]) -> Materials:
        """Fail-fast mode: raise the first violation, else return resolved materials."""
        materials: Materials = {}
        for violation in self.iter_violations(manifest, levels, materials):
            raise violation
        return materials

    # --- Load / publish ---
    @staticmethod
    def _reject(error: ContentError) -> None:
        logger.error("Content batch rejected, keeping previous snapshot: %s", error)

    def publish(self, manifest: MaterialManifest, levels: Iterable[LevelDefinition]) -> ContentSnapshot:
        levels = list(levels)
        try:
            materials = self.validate(manifest, levels)
        except ContentError as e:
            self._reject(e)
            raise
        snapshot = ContentSnapshot.build(manifest.freeze(), levels, materials)
        return self.store.publish(snapshot)

    def load_batch(self, manifest_doc: Dict[str, Any], level_docs: Iterable[Dict[str, Any]]) -> ContentSnapshot:
        try:
            manifest = build_manifest_from_dict(manifest_doc)
            levels = [build_level_from_dict(doc, source=f"level[{i}]") for i, doc in enumerate(level_docs)]
        except ContentError as e:
            self._reject(e)
            raise
        return self.publish(manifest, levels)

    def load_from_paths(self, manifest_path: Union[str, Path], levels_dir: Union[str, Path]) -> ContentSnapshot:
        try:
            manifest = load_manifest_file(manifest_path)
            levels = load_levels_dir(levels_dir)
        except ContentError as e:
            self._reject(e)
            raise
        logger.info("Loaded %d levels from %s", len(levels), levels_dir)
        return self.publish(manifest, levels)

    @property
    def current(self) -> Optional[ContentSnapshot]:
        return self.store.current()
