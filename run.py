"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import PRESETS
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.utils import describe_categories, unknown_categories
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter (Python)",
        epilog=describe_categories(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to a raw CHIP-8 program image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--hz",
        type=int,
        default=700,
        help="Instructions executed per second (default: 700)",
    )
    parser.add_argument(
        "--quirks",
        choices=sorted(PRESETS),
        default="default",
        help="Compatibility quirk preset (default: default)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.hz <= 0:
        parser.error("--hz must be positive")
    for name in unknown_categories():
        print(f"run.py: ignoring unknown debug category '{name}'", file=sys.stderr)

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        cpu_hz=args.hz,
        quirks_preset=args.quirks,
        fullscreen=args.fullscreen,
        palette=PALETTES[args.palette],
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
