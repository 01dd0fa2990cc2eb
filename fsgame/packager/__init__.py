from .packager import Packager

__all__ = ["Packager"]
