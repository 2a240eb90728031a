#!/usr/bin/env python3
"""
Generate a slide deck from a project directory.

Usage:
    python build_presentation.py [root] [out] [--max-depth N] [--ignore NAME]

Notes:
- Writes presentation-content.json and code-presentation.html into the
  output directory (default: <root>/presentation).
- Edit the JSON to change slide text or reorder slides; rerun to update.
  Existing entries are never overwritten, new files are appended.
"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

import config as cfg
from codeslides.errors import CodeSlidesError
from presentation_builder import PresentationBuilder


def setup_logging(level="WARNING"):
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Generate a presentation from a project directory.",
        epilog=(
            "Examples: codeslides .  |  codeslides ./src  |  codeslides ./src ./output"
        ),
    )
    p.add_argument("root", nargs="?", default=".", help="Project root (default: current directory)")
    p.add_argument("out", nargs="?", help="Output directory (default: <root>/presentation)")
    p.add_argument("--max-depth", type=int,
                   help="Scan depth limit (default: CODESLIDES_MAX_DEPTH or 5)")
    p.add_argument("--ignore", action="append", default=[], metavar="NAME",
                   help="Extra file or directory name to skip (repeatable)")
    p.add_argument("--template-dir", type=Path,
                   help="Directory holding index.html and dist/ (default: bundled template)")
    p.add_argument("--log-level", default=None,
                   help="Logging level for diagnostics (default: CODESLIDES_LOG_LEVEL or WARNING)")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level or cfg.get_log_level())

    builder = PresentationBuilder(
        Path(args.root),
        Path(args.out) if args.out else None,
        max_depth=args.max_depth,
        extra_ignores=args.ignore,
        template_dir=args.template_dir,
    )

    try:
        report = builder.build()
    except (CodeSlidesError, OSError) as e:
        print(f"\n❌ Error: {e}\n")
        return 1

    print("\n✨ Build complete!\n")
    print("📄 Files created:")
    for path in (report.html_path, report.content_path):
        print(f"  • {os.path.relpath(path)}")
    print("\n📌 Next steps:")
    print(f"  1. Open {report.html_path.name} in your browser")
    print(f"  2. Edit {report.content_path.name} to customize slides")
    print("  3. Run codeslides again to update")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
