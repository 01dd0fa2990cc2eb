"""
FSGAME CLI - Pack Command
Usage: python -m fsgame_cli.commands.pack build/ -o dist/ --fragment-size-kb 512
"""
import argparse
import sys
from pathlib import Path
from typing import Optional, Set
from fsgame.config import config
from fsgame.packager.packager import Packager
from fsgame.utils.logger import logger


def remove_partial_output(out_dir: Path, existing: Optional[Set[str]]):
    """
    Delete what an interrupted run wrote, leaving files that were already
    there. existing is None when this run created out_dir.
    """
    if not out_dir.exists():
        return
    for path in out_dir.iterdir():
        if path.is_file() and (existing is None or path.name not in existing):
            path.unlink()
    if existing is None and not any(out_dir.iterdir()):
        out_dir.rmdir()


def main():
    parser = argparse.ArgumentParser(description="Pack a directory into FSGAME fragments and a manifest")
    parser.add_argument("input", help="Directory to pack")
    parser.add_argument("-o", "--output", help="Output directory (default: <input>_fsgame)")
    parser.add_argument("-n", "--name", help="Fragment file stem (default: input directory name)")
    parser.add_argument("--fragment-size-kb", type=int, default=None,
                        help=f"Fragment size in KB (default: {config.fragment_size // 1024})")
    parser.add_argument("-l", "--level", type=int, choices=range(0, 10), default=None,
                        help=f"zlib compression level (default: {config.compression_level})")
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing output")

    args = parser.parse_args()

    input_dir = Path(args.input)
    if not input_dir.is_dir():
        logger.error(f"Input directory not found: {input_dir}")
        sys.exit(1)

    out_dir = Path(args.output) if args.output else input_dir.parent / f"{input_dir.name}_fsgame"
    if out_dir.exists() and any(out_dir.iterdir()) and not args.force:
        logger.error(f"Output directory is not empty: {out_dir}")
        print("Use -f or --force to overwrite.")
        sys.exit(1)

    fragment_size = args.fragment_size_kb * 1024 if args.fragment_size_kb else None
    existing = {p.name for p in out_dir.iterdir()} if out_dir.exists() else None

    try:
        packager = Packager(compression_level=args.level)
        result = packager.pack_directory(
            str(input_dir),
            str(out_dir),
            archive_name=args.name,
            fragment_size=fragment_size
        )
        print(f"\n✅ Success! Manifest saved to: {result['manifest_path']}")
        print(f"   Fragments: {len(result['fragments'])}")
        print(f"   Saved:     {result['space_saved_percent']:.1f}%")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        remove_partial_output(out_dir, existing)
        sys.exit(130)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
