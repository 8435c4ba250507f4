"""Runtime registry for material profiles.

MaterialManifest is an in-memory index from profile id to MaterialProfile,
plus the per-type variants and per-level presentation overrides shipped in
the same manifest file. It exposes lookup only: fallback logic lives in
ProfileResolver.
"""
from __future__ import annotations
from typing import Dict, Iterator, List, Optional

from ..errors import DuplicateLevelNumber, DuplicateProfileId, InvalidProfileReference, ManifestFrozen
from .model.base import LevelSwitchState, MaterialProfile, PresentationBlock, TypeVariant

__all__ = ["MaterialManifest"]


class MaterialManifest:
    def __init__(self, profiles: Optional[List[MaterialProfile]] = None):
        self.profiles: Dict[str, MaterialProfile] = {}
        self.type_variants: List[TypeVariant] = []
        self.level_overrides: Dict[int, PresentationBlock] = {}
        self.level_switch: Optional[LevelSwitchState] = None
        self._frozen = False
        for profile in profiles or []:
            self.insert(profile)

    # --- Load-time mutation ---
    def insert(self, profile: MaterialProfile) -> None:
        if self._frozen:
            raise ManifestFrozen(profile.id)
        if profile.id in self.profiles:
            raise DuplicateProfileId(profile.id)
        # Chain targets may be defined later in the file: only shape is checked here.
        for ref in profile.fallback_chain:
            if not isinstance(ref, str) or not ref:
                raise InvalidProfileReference(profile.id, ref)
        self.profiles[profile.id] = profile

    def add_type_variant(self, variant: TypeVariant) -> None:
        if self._frozen:
            raise ManifestFrozen(variant.profile_id)
        self.type_variants.append(variant)

    def add_level_override(self, block: PresentationBlock) -> None:
        if self._frozen:
            raise ManifestFrozen(f"level_override:{block.level_number}")
        if block.level_number in self.level_overrides:
            raise DuplicateLevelNumber(block.level_number, source="manifest level_overrides")
        self.level_overrides[block.level_number] = block

    def freeze(self) -> "MaterialManifest":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # --- Lookup ---
    def lookup(self, profile_id: str) -> Optional[MaterialProfile]:
        return self.profiles.get(profile_id)

    def ids(self) -> List[str]:
        return sorted(self.profiles)

    def profiles_in(self, category: str) -> Iterator[MaterialProfile]:
        for profile_id in self.ids():
            profile = self.profiles[profile_id]
            if profile.category == category:
                yield profile

    def level_override(self, level_number: int) -> Optional[PresentationBlock]:
        return self.level_overrides.get(level_number)

    def variant_for(self, object_class: str, type_id: int) -> Optional[TypeVariant]:
        for variant in self.type_variants:
            if variant.object_class == object_class and variant.type_id == type_id:
                return variant
        return None

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self.profiles

    def __len__(self) -> int:
        return len(self.profiles)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "loading"
        return f"<MaterialManifest {len(self.profiles)} profiles, {len(self.type_variants)} variants ({state})>"
