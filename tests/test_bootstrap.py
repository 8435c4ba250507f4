"""Tests for loading the shipped assets and the validation CLI."""

import json
import os
import shutil

import pytest

import run
from brickgrid.core.model.base import CellType
from brickgrid.core.validator import LevelValidator
from brickgrid.errors import MalformedContent, UnknownProfile
from config import ASSETS_DIR_DEFAULT
from game.bootstrap import get_validator, load_content, reload_content

MANIFEST = os.path.join(ASSETS_DIR_DEFAULT, "textures", "manifest.json")
LEVELS = os.path.join(ASSETS_DIR_DEFAULT, "levels")


@pytest.fixture
def validator():
    return LevelValidator(required_categories=["ground"])


@pytest.fixture
def content_dir(tmp_path):
    """Copy of the shipped assets that tests can break."""
    levels = tmp_path / "levels"
    levels.mkdir()
    for name in os.listdir(LEVELS):
        with open(os.path.join(LEVELS, name), encoding="utf-8") as f:
            (levels / name).write_text(f.read(), encoding="utf-8")
    with open(MANIFEST, encoding="utf-8") as f:
        (tmp_path / "manifest.json").write_text(f.read(), encoding="utf-8")
    return tmp_path


class TestShippedAssets:

    def test_load_content(self, validator):
        snap = load_content(MANIFEST, LEVELS, validator=validator)
        assert snap.level_numbers() == [1, 2]
        assert snap.generation == 1
        assert snap.manifest.frozen

    def test_level_one_materials(self, validator):
        snap = load_content(MANIFEST, LEVELS, validator=validator)
        mats = snap.presentation_materials(1)
        assert mats["ground_profile"].source_id == "ground/cobble_01"
        assert mats["ground_profile"].normal_path == "background/cobble_01_normal.png"
        assert mats["background_profile"].source_id == "background/default"
        assert mats["sidewall_profile"].metallic == 0.9
        level = snap.level(1)
        assert level.completion_brick_count() == 64
        assert list(level.cells_of(CellType.PADDLE)) == [(18, 10)]

    def test_level_two_uses_manifest_override(self, validator):
        snap = load_content(MANIFEST, LEVELS, validator=validator)
        assert snap.level(2).presentation is None
        assert snap.level(2).gravity == (2.0, 0.0, 0.0)
        mats = snap.presentation_materials(2)
        assert mats["ground_profile"].source_id == "ground/default"
        assert mats["ground_profile"].uv_scale == (4.0, 3.0)
        assert mats["background_profile"].requested_id == "background/night_sky"
        assert "sidewall_profile" not in mats

    def test_type_variants(self, validator):
        snap = load_content(MANIFEST, LEVELS, validator=validator)
        variant = snap.manifest.variant_for("Brick", 90)
        assert snap.resolve(variant.profile_id).source_id == "brick/default"


class TestReload:

    def test_reload_failure_keeps_snapshot(self, content_dir, validator, monkeypatch, caplog):
        monkeypatch.setenv("BG_MANIFEST_PATH", str(content_dir / "manifest.json"))
        monkeypatch.setenv("BG_LEVELS_DIR", str(content_dir / "levels"))
        first = reload_content(validator)
        assert first.generation == 1

        doc = json.loads((content_dir / "levels" / "level_001.json").read_text(encoding="utf-8"))
        doc["presentation"]["ground_profile"] = "ground/missing"
        (content_dir / "levels" / "level_001.json").write_text(json.dumps(doc), encoding="utf-8")
        with caplog.at_level("WARNING"):
            again = reload_content(validator)
        assert again is first
        assert validator.current is first
        assert "Reload failed" in caplog.text

    def test_reload_with_undecodable_level_keeps_snapshot(self, content_dir, validator, monkeypatch):
        monkeypatch.setenv("BG_MANIFEST_PATH", str(content_dir / "manifest.json"))
        monkeypatch.setenv("BG_LEVELS_DIR", str(content_dir / "levels"))
        first = reload_content(validator)

        (content_dir / "levels" / "level_001.json").write_bytes(b'{"number": 1, "notes": "\xff\xfe"}')
        assert reload_content(validator) is first
        assert validator.current.generation == 1

    def test_reload_with_missing_levels_dir_keeps_snapshot(self, content_dir, validator, monkeypatch, caplog):
        monkeypatch.setenv("BG_MANIFEST_PATH", str(content_dir / "manifest.json"))
        monkeypatch.setenv("BG_LEVELS_DIR", str(content_dir / "levels"))
        first = reload_content(validator)

        shutil.rmtree(content_dir / "levels")
        with caplog.at_level("ERROR"):
            again = reload_content(validator)
        assert again is first
        assert again.level_numbers() == [1, 2]
        assert "levels directory not found" in caplog.text

    def test_load_content_raises(self, content_dir, validator):
        (content_dir / "manifest.json").write_text("not json", encoding="utf-8")
        with pytest.raises(MalformedContent):
            load_content(content_dir / "manifest.json", content_dir / "levels", validator=validator)
        assert validator.current is None


class TestCli:

    def test_shipped_assets_pass(self, capsys):
        assert run.main(["--manifest", MANIFEST, "--levels", LEVELS]) == 0
        out = capsys.readouterr().out
        assert "PASS level 1" in out
        assert "PASS level 2" in out

    def test_grid_summary(self, capsys):
        run.main(["--manifest", MANIFEST, "--levels", LEVELS, "--grid"])
        out = capsys.readouterr().out
        assert "Overlay lines: 21 vertical, 21 horizontal" in out

    def test_report_all(self, content_dir, capsys):
        doc = json.loads((content_dir / "levels" / "level_002.json").read_text(encoding="utf-8"))
        doc["number"] = 1
        doc["matrix"] = doc["matrix"][:19]
        (content_dir / "levels" / "level_002.json").write_text(json.dumps(doc), encoding="utf-8")
        code = run.main([
            "--manifest", str(content_dir / "manifest.json"),
            "--levels", str(content_dir / "levels"),
            "--report-all",
        ])
        out = capsys.readouterr().out
        assert code == 1
        assert "FAIL DimensionMismatch" in out
        assert "FAIL DuplicateLevelNumber" in out
        assert "FAIL UnknownLevelNumber" in out
        assert "PASS" not in out

    def test_export_contract(self, tmp_path, capsys):
        target = tmp_path / "build" / "contract.json"
        assert run.main(["--manifest", MANIFEST, "--levels", LEVELS, "--export-contract", str(target)]) == 0
        contract = json.loads(target.read_text(encoding="utf-8"))
        assert contract["profiles"][0]["id"] == "background/default"
        assert contract["levelSwitch"] == {"orderedLevels": [1, 2]}

    def test_missing_manifest(self, tmp_path, capsys):
        assert run.main(["--manifest", str(tmp_path / "nope.json"), "--levels", LEVELS]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_unknown_profile_fails_fast(self, content_dir, capsys):
        doc = json.loads((content_dir / "levels" / "level_001.json").read_text(encoding="utf-8"))
        doc["presentation"]["sidewall_profile"] = "sidewall/chrome"
        (content_dir / "levels" / "level_001.json").write_text(json.dumps(doc), encoding="utf-8")
        code = run.main(["--manifest", str(content_dir / "manifest.json"), "--levels", str(content_dir / "levels")])
        out = capsys.readouterr().out
        assert code == 1
        assert f"FAIL {UnknownProfile.__name__}" in out
        assert "sidewall_profile" in out


def test_default_validator_is_shared():
    assert get_validator() is get_validator()
