"""Deterministic serialization of levels and manifests.

Tools that produce level/manifest files go through the typed model and
write the result back with write_json, instead of patching text in place.
Output is stable: fixed key order, two-space indent, trailing newline.

manifest_contract() produces the camelCase view consumed by external
tooling (profiles sorted by id, variants by class/type, overrides by level).
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .model.base import Color, LevelDefinition, MaterialProfile, PresentationBlock, TypeVariant
from .registry import MaterialManifest

__all__ = [
    "dump_level",
    "dump_presentation",
    "dump_profile",
    "dump_manifest",
    "manifest_contract",
    "to_json",
    "write_json",
]


def _color(color: Optional[Color]) -> Optional[List[float]]:
    return list(color) if color is not None else None


def dump_presentation(block: PresentationBlock) -> Dict[str, Any]:
    return {
        "level_number": block.level_number,
        "ground_profile": block.ground_profile,
        "background_profile": block.background_profile,
        "sidewall_profile": block.sidewall_profile,
        "tint": _color(block.tint),
        "notes": block.notes,
    }


def dump_level(level: LevelDefinition) -> Dict[str, Any]:
    data: Dict[str, Any] = {"number": level.number}
    if level.gravity is not None:
        data["gravity"] = list(level.gravity)
    data["matrix"] = [[int(cell) for cell in row] for row in level.matrix]
    if level.presentation is not None:
        data["presentation"] = dump_presentation(level.presentation)
    return data


def dump_profile(profile: MaterialProfile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "albedo_path": profile.albedo_path,
        "normal_path": profile.normal_path,
        "roughness": profile.roughness,
        "metallic": profile.metallic,
        "uv_scale": list(profile.uv_scale),
        "uv_offset": list(profile.uv_offset),
        "fallback_chain": list(profile.fallback_chain),
    }


def _dump_variant(variant: TypeVariant) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "object_class": variant.object_class,
        "type_id": variant.type_id,
        "profile_id": variant.profile_id,
    }
    if variant.emissive_color is not None:
        data["emissive_color"] = _color(variant.emissive_color)
    if variant.animation is not None:
        data["animation"] = {"kind": variant.animation.kind, "params": dict(variant.animation.params)}
    return data


def dump_manifest(manifest: MaterialManifest) -> Dict[str, Any]:
    """File-format dict; profiles keep insertion order so diffs stay minimal."""
    data: Dict[str, Any] = {"profiles": [dump_profile(p) for p in manifest.profiles.values()]}
    if manifest.type_variants:
        data["type_variants"] = [_dump_variant(v) for v in manifest.type_variants]
    if manifest.level_overrides:
        data["level_overrides"] = [
            dump_presentation(manifest.level_overrides[n]) for n in sorted(manifest.level_overrides)
        ]
    if manifest.level_switch is not None:
        data["level_switch"] = {"ordered_levels": list(manifest.level_switch.ordered_levels)}
    return data


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _contract_entry(data: Dict[str, Any]) -> Dict[str, Any]:
    # Optional fields are omitted when empty
    return {_camel(k): v for k, v in data.items() if v is not None and v != []}


def manifest_contract(manifest: MaterialManifest) -> Dict[str, Any]:
    profiles = [_contract_entry(dump_profile(manifest.profiles[pid])) for pid in manifest.ids()]
    variants = sorted(manifest.type_variants, key=lambda v: (v.object_class, v.type_id))
    contract: Dict[str, Any] = {
        "profiles": profiles,
        "typeVariants": [_contract_entry(_dump_variant(v)) for v in variants],
        "levelOverrides": [
            _contract_entry(dump_presentation(manifest.level_overrides[n]))
            for n in sorted(manifest.level_overrides)
        ],
    }
    if manifest.level_switch is not None:
        contract["levelSwitch"] = {"orderedLevels": list(manifest.level_switch.ordered_levels)}
    return contract


def to_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Union[str, Path], data: Dict[str, Any]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json(data), encoding="utf-8")
    return target
