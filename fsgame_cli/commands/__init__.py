"""
FSGAME CLI Commands
Each module is runnable with python -m fsgame_cli.commands.<name>.
"""

from . import ingest
from . import inspect
from . import pack
from . import extract

__all__ = ["ingest", "inspect", "pack", "extract"]
