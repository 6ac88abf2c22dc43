# python/oceanforge/cli.py
# Command-line dump of packed water uniform records
# Exists to inspect exactly what a renderer would upload for a given configuration
# RELEVANT FILES: python/oceanforge/config.py, python/oceanforge/uniforms.py, tests/test_cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, presets
from .config import WaterConfig, build_surface, load_water_config, read_config_file
from .uniforms import UniformRecord, fbm_layout, fft_layout, pack_spectrum, spectrum_layout, sum_layout

logger = logging.getLogger(__name__)

_METHODS = ("sum", "fbm", "fft", "spectrum")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="oceanforge",
        description="Synthesize ocean wave parameters and print the packed uniform record.",
    )
    p.add_argument("--method", choices=_METHODS, default=None,
                   help="Record to pack (defaults to the configured method)")
    p.add_argument("--config", type=str, default=None, help="JSON water configuration file")
    p.add_argument("--preset", type=str, default=None,
                   help=f"Named preset applied before --config overrides ({', '.join(presets.available())})")
    p.add_argument("--time", type=float, default=0.0, help="Elapsed time in seconds")
    p.add_argument("--seed", type=int, default=None, help="Seed for the sum-of-sines generator")
    p.add_argument("--format", choices=("json", "hex", "layout", "wgsl"), default="json",
                   help="Output format")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _render(record: UniformRecord, fmt: str) -> str:
    if fmt == "hex":
        return record.hex()
    if fmt == "layout":
        lines = [f"{record.name} ({record.size} bytes)"]
        lines.extend(f"{offset:5d}  {name}: {wgsl}" for name, offset, wgsl in record.layout)
        return "\n".join(lines)
    return json.dumps({"name": record.name, "size": record.size, "fields": record.to_dict()}, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = WaterConfig.from_mapping(presets.get(args.preset)) if args.preset else WaterConfig()
        if args.config:
            cfg = WaterConfig.from_mapping(read_config_file(Path(args.config)), cfg)
        overrides = {}
        if args.seed is not None:
            overrides["seed"] = args.seed
        if args.method and args.method != "spectrum":
            overrides["method"] = args.method
        cfg = load_water_config(cfg, overrides)
        surface = build_surface(cfg)
        surface.advance(args.time)
        if args.method == "spectrum":
            record = pack_spectrum(surface.fft_material.spectrum)
        else:
            record = surface.pack_active()
    except (ValueError, TypeError, OSError) as exc:
        logger.debug("configuration rejected", exc_info=True)
        print(f"oceanforge: error: {exc}", file=sys.stderr)
        return 2

    if args.format == "wgsl":
        layouts = {
            "sum": lambda: sum_layout(len(surface.sum_material.waves)),
            "fbm": fbm_layout,
            "fft": fft_layout,
            "spectrum": spectrum_layout,
        }
        key = args.method or surface.method.value
        print(layouts[key]().wgsl())
    else:
        print(_render(record, args.format))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
