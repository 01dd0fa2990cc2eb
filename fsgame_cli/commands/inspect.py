"""
FSGAME CLI - Inspect Command
Usage: python -m fsgame_cli.commands.inspect dist/manifest.json
"""
import argparse
import sys
from fsgame.errors import FSGameError
from fsgame.tools.inspector import Inspector
from fsgame.utils.logger import logger


def main():
    parser = argparse.ArgumentParser(
        description="Inspect an FSGAME archive without unpacking it"
    )
    parser.add_argument("input", help="Archive file, or manifest (.json) URL/path")

    args = parser.parse_args()

    try:
        Inspector().inspect(args.input)
    except FSGameError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Inspection failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
