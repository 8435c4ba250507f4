"""Load the material manifest: profiles, type variants and level overrides.

The manifest document is checked against MANIFEST_SCHEMA, then every entry is
inserted into a fresh MaterialManifest so duplicate ids fail at insert time.
Missing optional fields take the same defaults as the runtime loader
(roughness 0.5, metallic 0.0, uv_scale 1x1, uv_offset 0x0).
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Union

from ..model.base import AnimationDescriptor, LevelSwitchState, MaterialProfile, TypeVariant
from ..registry import MaterialManifest
from ..schema import MANIFEST_SCHEMA
from .documents import check_document, read_document
from .level_loader import build_presentation, parse_color

__all__ = ["build_profile", "build_manifest_from_dict", "load_manifest_file"]


def build_profile(data: Dict[str, Any]) -> MaterialProfile:
    uv_scale = data.get("uv_scale", (1.0, 1.0))
    uv_offset = data.get("uv_offset", (0.0, 0.0))
    return MaterialProfile(
        id=data["id"],
        albedo_path=data.get("albedo_path") or "",
        normal_path=data.get("normal_path"),
        roughness=float(data.get("roughness", 0.5)),
        metallic=float(data.get("metallic", 0.0)),
        uv_scale=(float(uv_scale[0]), float(uv_scale[1])),
        uv_offset=(float(uv_offset[0]), float(uv_offset[1])),
        fallback_chain=tuple(data.get("fallback_chain", [])),
    )


def _build_type_variant(data: Dict[str, Any]) -> TypeVariant:
    animation = data.get("animation")
    return TypeVariant(
        object_class=data["object_class"],
        type_id=data["type_id"],
        profile_id=data["profile_id"],
        emissive_color=parse_color(data.get("emissive_color")),
        animation=AnimationDescriptor(kind=animation["kind"], params=dict(animation.get("params", {})))
        if animation else None,
    )


def build_manifest_from_dict(data: Dict[str, Any], source: str = "<manifest>") -> MaterialManifest:
    check_document(data, MANIFEST_SCHEMA, source)
    manifest = MaterialManifest()
    for p in data["profiles"]:
        manifest.insert(build_profile(p))
    for v in data.get("type_variants", []):
        manifest.add_type_variant(_build_type_variant(v))
    for o in data.get("level_overrides", []):
        manifest.add_level_override(build_presentation(o))
    switch = data.get("level_switch")
    if switch is not None:
        manifest.level_switch = LevelSwitchState(ordered_levels=tuple(switch.get("ordered_levels", [])))
    return manifest


def load_manifest_file(path: Union[str, Path]) -> MaterialManifest:
    return build_manifest_from_dict(read_document(path), source=str(path))
