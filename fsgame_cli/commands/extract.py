"""
FSGAME CLI - Extract Command
Usage: python -m fsgame_cli.commands.extract --store game.db -o site/
"""
import argparse
import sys
from pathlib import Path
from fsgame.config import config
from fsgame.errors import FSGameError
from fsgame.orchestrator.viewer import export_store
from fsgame.store.blob_store import BlobStore
from fsgame.utils.logger import logger


def main():
    parser = argparse.ArgumentParser(description="Write every file in an FSGAME store out to a directory")
    parser.add_argument("-s", "--store", default=None,
                        help=f"SQLite store path (default: {config.db_path})")
    parser.add_argument("-o", "--output", help="Directory to write files into")
    parser.add_argument("-l", "--list", action="store_true", help="List stored files instead of writing them")
    parser.add_argument("-f", "--force", action="store_true", help="Write into a non-empty directory")

    args = parser.parse_args()

    store = BlobStore(args.store)
    if store.path != BlobStore.MEMORY and not Path(store.path).exists():
        logger.error(f"Store not found: {store.path}")
        sys.exit(1)

    if not args.list and not args.output:
        parser.error("-o/--output is required unless --list is given")

    out_dir = Path(args.output or ".")
    if not args.list and out_dir.exists() and any(out_dir.iterdir()) and not args.force:
        logger.error(f"Output directory is not empty: {out_dir}")
        print("Use -f or --force to overwrite.")
        sys.exit(1)

    try:
        if args.list:
            for entry in store.entries():
                print(f"  {entry.key:<40} {entry.size:>10}  {entry.content_type}")
            return

        count = export_store(store, str(out_dir))
        print(f"\n✅ Success! {count} file(s) written to {out_dir}")

    except FSGameError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        store.close()


if __name__ == "__main__":
    main()
