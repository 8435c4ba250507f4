"""Profile resolution through fallback chains.

A profile with an albedo texture is *directly resolvable*. Otherwise its
``fallback_chain`` is walked depth-first in declared order until a directly
resolvable profile is reached; that single profile supplies every renderable
parameter (no blending across the chain).

The walk keeps an explicit stack instead of recursing, so chain depth is
bounded by the number of profiles and not by the interpreter's call stack.
The current reference path doubles as the visited-set used for cycle
detection.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..errors import CyclicFallbackChain, ResolutionError, UnknownProfile, UnresolvedProfile
from .model.base import ResolvedMaterial
from .registry import MaterialManifest

__all__ = ["ProfileResolver"]

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Resolve ProfileReferences against one manifest.

    Resolution performs no I/O and never mutates the manifest, so a single
    resolver can be shared across threads once the manifest is frozen.
    """

    def __init__(self, manifest: MaterialManifest):
        self.manifest = manifest

    def resolve(self, profile_id: str) -> ResolvedMaterial:
        root = self.manifest.lookup(profile_id)
        if root is None:
            raise UnknownProfile(profile_id)
        if root.is_directly_resolvable:
            return ResolvedMaterial.from_profile(root)

        path: List[str] = [profile_id]
        on_path: Set[str] = {profile_id}
        exhausted: Set[str] = set()
        stack: List[Iterator[str]] = [iter(root.fallback_chain)]
        cycle: Optional[Tuple[str, ...]] = None

        while stack:
            candidate = next(stack[-1], None)
            if candidate is None:
                stack.pop()
                done = path.pop()
                on_path.discard(done)
                exhausted.add(done)
                continue
            if candidate in on_path:
                if cycle is None:
                    cycle = tuple(path) + (candidate,)
                continue
            if candidate in exhausted:
                continue
            profile = self.manifest.lookup(candidate)
            if profile is None:
                logger.debug("Fallback '%s' of '%s' not in manifest; skipping", candidate, path[-1])
                continue
            if profile.is_directly_resolvable:
                return ResolvedMaterial.from_profile(profile, requested_id=profile_id)
            path.append(candidate)
            on_path.add(candidate)
            stack.append(iter(profile.fallback_chain))

        if cycle is not None:
            raise CyclicFallbackChain(cycle)
        raise UnresolvedProfile(profile_id)

    def resolve_many(self, profile_ids: Iterable[str]) -> Dict[str, ResolvedMaterial]:
        resolved: Dict[str, ResolvedMaterial] = {}
        for profile_id in profile_ids:
            if profile_id not in resolved:
                resolved[profile_id] = self.resolve(profile_id)
        return resolved

    def try_resolve(self, profile_id: str) -> Optional[ResolvedMaterial]:
        """Runtime variant of resolve(): logs and returns None instead of raising."""
        try:
            return self.resolve(profile_id)
        except ResolutionError as e:
            logger.warning("Profile resolution failed: %s", e)
            return None
