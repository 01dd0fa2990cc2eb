from .logger import logger
from .checksum import calculate_bytes_checksum, calculate_file_checksum

__all__ = [
    "logger",
    "calculate_bytes_checksum",
    "calculate_file_checksum"
]
