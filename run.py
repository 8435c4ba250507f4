"""Validate level and material content from the command line.

Usage (example):
    python run.py
    python run.py --levels assets/levels --manifest assets/textures/manifest.json --report-all
    python run.py --export-contract build/manifest_contract.json
"""
from __future__ import annotations
import argparse
import sys

from brickgrid.core.content import (
    LevelValidator,
    cell_size,
    default_dimensions,
    grid_line_positions,
    load_levels_dir,
    load_manifest_file,
)
from brickgrid.core.persistence import manifest_contract, write_json
from brickgrid.errors import ContentError
from config import configure_logging, get_levels_dir, get_manifest_path, get_plane_size


def _print_grid() -> None:
    dims = default_dimensions()
    plane_w, plane_h = get_plane_size()
    cw, ch = cell_size(dims, plane_w, plane_h)
    xs, ys = grid_line_positions(dims, cw, ch)
    print(f"Grid {dims.width}x{dims.height} on plane {plane_w}x{plane_h}")
    print(f"  Cell size: {cw:g} x {ch:g}")
    print(f"  Overlay lines: {len(xs)} vertical, {len(ys)} horizontal")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate level files against the material manifest.")
    parser.add_argument("--manifest", default=None, help="Manifest JSON (default: BG_MANIFEST_PATH)")
    parser.add_argument("--levels", default=None, help="Directory with level_*.json (default: BG_LEVELS_DIR)")
    parser.add_argument("--report-all", action="store_true", help="List every violation instead of stopping at the first")
    parser.add_argument("--export-contract", metavar="PATH", help="Write the camelCase manifest contract to PATH")
    parser.add_argument("--grid", action="store_true", help="Print derived grid geometry")
    args = parser.parse_args(argv)

    configure_logging()
    manifest_path = args.manifest or get_manifest_path()
    levels_dir = args.levels or get_levels_dir()

    if args.grid:
        _print_grid()

    try:
        manifest = load_manifest_file(manifest_path)
        levels = load_levels_dir(levels_dir)
    except ContentError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Verifying {len(levels)} levels against {manifest_path} ({len(manifest)} profiles)\n")
    validator = LevelValidator()
    if args.report_all:
        violations = validator.check(manifest, levels)
    else:
        try:
            validator.validate(manifest, levels)
            violations = []
        except ContentError as e:
            violations = [e]

    for violation in violations:
        print(f"  FAIL {type(violation).__name__}: {violation}")
    if not violations:
        for level in levels:
            print(f"  PASS level {level.number}")

    if args.export_contract and not violations:
        target = write_json(args.export_contract, manifest_contract(manifest))
        print(f"\nContract written to {target}")

    print("\nDone.")
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
