from .decoder import ContainerHeader, ContainerRecord, ContainerDecoder, decode_records
from .inflator import InflatedFile, RecordInflator, inflate_record
from .content_types import ContentType, classify

__all__ = [
    "ContainerHeader",
    "ContainerRecord",
    "ContainerDecoder",
    "decode_records",
    "InflatedFile",
    "RecordInflator",
    "inflate_record",
    "ContentType",
    "classify"
]
