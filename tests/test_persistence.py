"""Tests for deterministic level/manifest serialization."""

import json

import pytest

from brickgrid.core.loader.level_loader import build_level_from_dict, load_level_file
from brickgrid.core.loader.manifest_loader import build_manifest_from_dict
from brickgrid.core.model.base import (
    AnimationDescriptor,
    CellType,
    LevelDefinition,
    LevelSwitchState,
    MaterialProfile,
    PresentationBlock,
    TypeVariant,
)
from brickgrid.core.persistence import (
    dump_level,
    dump_manifest,
    manifest_contract,
    to_json,
    write_json,
)
from brickgrid.core.registry import MaterialManifest


@pytest.fixture
def level():
    matrix = [[CellType.EMPTY] * 20 for _ in range(20)]
    matrix[2][3] = CellType.MULTI_HIT_2
    matrix[18][10] = CellType.PADDLE
    return LevelDefinition(
        number=4,
        matrix=tuple(tuple(r) for r in matrix),
        presentation=PresentationBlock(4, ground_profile="ground/cobble", tint=(1.0, 0.9, 0.8, 1.0)),
        gravity=(0.0, 0.0, -9.8),
    )


@pytest.fixture
def manifest():
    m = MaterialManifest([
        MaterialProfile(id="wall/steel", albedo_path="steel.png", metallic=1.0),
        MaterialProfile(id="ground/cobble", fallback_chain=("ground/default",)),
        MaterialProfile(id="ground/default", albedo_path="g.png", normal_path="g_n.png"),
    ])
    m.add_type_variant(TypeVariant("Brick", 41, "wall/steel", emissive_color=(1.0, 0.0, 0.0, 1.0),
                                   animation=AnimationDescriptor("pulse", {"period": 1.5})))
    m.add_type_variant(TypeVariant("Ball", 0, "ground/default"))
    m.add_type_variant(TypeVariant("Brick", 20, "ground/default"))
    m.add_level_override(PresentationBlock(9, background_profile="wall/steel"))
    m.add_level_override(PresentationBlock(2, ground_profile="ground/default"))
    m.level_switch = LevelSwitchState((2, 9))
    return m


class TestLevelDump:

    def test_dump_then_build_is_equal(self, level):
        assert build_level_from_dict(dump_level(level)) == level

    def test_cells_written_as_ints(self, level):
        data = dump_level(level)
        assert data["matrix"][2][3] == 11
        assert type(data["matrix"][2][3]) is int

    def test_write_and_reload(self, tmp_path, level):
        path = write_json(tmp_path / "out" / "level_004.json", dump_level(level))
        assert path.exists()
        assert load_level_file(path) == level

    def test_optional_fields_omitted(self):
        bare = LevelDefinition(number=1, matrix=((CellType.EMPTY,),))
        assert dump_level(bare) == {"number": 1, "matrix": [[0]]}


class TestManifestDump:

    def test_dump_then_build_is_equal(self, manifest):
        rebuilt = build_manifest_from_dict(dump_manifest(manifest))
        assert rebuilt.profiles == manifest.profiles
        assert rebuilt.type_variants == manifest.type_variants
        assert rebuilt.level_overrides == manifest.level_overrides
        assert rebuilt.level_switch == manifest.level_switch

    def test_profiles_keep_insertion_order(self, manifest):
        ids = [p["id"] for p in dump_manifest(manifest)["profiles"]]
        assert ids == ["wall/steel", "ground/cobble", "ground/default"]

    def test_to_json_is_stable(self, manifest):
        text = to_json(dump_manifest(manifest))
        assert text == to_json(dump_manifest(manifest))
        assert text.endswith("}\n")
        assert json.loads(text)["level_switch"] == {"ordered_levels": [2, 9]}


class TestContract:

    def test_camel_case_and_sorting(self, manifest):
        contract = manifest_contract(manifest)
        assert [p["id"] for p in contract["profiles"]] == ["ground/cobble", "ground/default", "wall/steel"]
        assert [(v["objectClass"], v["typeId"]) for v in contract["typeVariants"]] == [
            ("Ball", 0), ("Brick", 20), ("Brick", 41),
        ]
        assert [o["levelNumber"] for o in contract["levelOverrides"]] == [2, 9]
        assert contract["levelSwitch"] == {"orderedLevels": [2, 9]}

    def test_empty_fields_omitted(self, manifest):
        contract = manifest_contract(manifest)
        cobble, default, _ = contract["profiles"]
        assert cobble["fallbackChain"] == ["ground/default"]
        assert "normalPath" not in cobble
        assert default["normalPath"] == "g_n.png"
        assert "fallbackChain" not in default
        assert default["uvScale"] == [1.0, 1.0]
        brick = contract["typeVariants"][2]
        assert brick["emissiveColor"] == [1.0, 0.0, 0.0, 1.0]
        assert brick["animation"] == {"kind": "pulse", "params": {"period": 1.5}}
        assert "emissiveColor" not in contract["typeVariants"][0]

    def test_no_level_switch(self):
        contract = manifest_contract(MaterialManifest([MaterialProfile(id="a", albedo_path="a.png")]))
        assert "levelSwitch" not in contract
        assert contract["typeVariants"] == []
