"""
FSGAME CLI - Ingest Command
Usage: python -m fsgame_cli.commands.ingest https://host/game/manifest.json --store game.db
       python -m fsgame_cli.commands.ingest dist/manifest.json --config fsgame.config.json
"""
import argparse
import sys
from pathlib import Path
from fsgame.config import config
from fsgame.errors import FSGameError
from fsgame.orchestrator.ingest import IngestOrchestrator
from fsgame.orchestrator.viewer import DirectoryViewer
from fsgame.store.blob_store import BlobStore
from fsgame.utils.logger import logger


class TerminalProgress:
    def __init__(self):
        self.percent = 0

    def update(self, percent, status):
        self.percent = percent
        filled = percent // 2
        bar = '█' * filled + '░' * (50 - filled)
        sys.stdout.write(f'\r   [{bar}] {percent:3d}% {status:<32}')
        sys.stdout.flush()
        if percent == 100:
            sys.stdout.write('\n')

    def fail(self, message):
        sys.stdout.write('\n')
        print(f"\033[31m❌ {message}\033[0m")


def main():
    parser = argparse.ArgumentParser(description="Fetch an FSGAME archive from its manifest and store its files")
    parser.add_argument("manifest", help="Manifest URL or local path")
    parser.add_argument("-s", "--store", default=None,
                        help=f"SQLite store path (default: {config.db_path})")
    parser.add_argument("-e", "--entry", default=None,
                        help=f"Entry file to hand to the viewer (default: {config.entry})")
    parser.add_argument("-x", "--extract", default=None,
                        help="Also export the stored files to this directory")
    parser.add_argument("-c", "--config", default=None,
                        help="JSON config file to load over the defaults")

    args = parser.parse_args()

    if args.config:
        try:
            config.load(args.config)
        except FileNotFoundError as e:
            logger.error(str(e))
            sys.exit(1)

    viewer = DirectoryViewer(args.extract) if args.extract else None
    store = BlobStore(args.store)

    try:
        orchestrator = IngestOrchestrator(
            store,
            progress=TerminalProgress(),
            viewer=viewer,
            entry=args.entry
        )
        result = orchestrator.run(args.manifest)

        print(f"\n✅ Success! {len(result.stored)} file(s) stored in {store.path}")
        if result.entry:
            print(f"   Entry:     {result.entry}")
        if viewer and viewer.entry_path:
            print(f"   Exported:  {Path(viewer.entry_path).resolve()}")
        print(f"   Time:      {result.elapsed:.2f}s")

    except KeyboardInterrupt:
        print("\n❌ Ingest cancelled by user.")
        sys.exit(130)
    except FSGameError as e:
        logger.error(f"Ingest failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        store.close()


if __name__ == "__main__":
    main()
