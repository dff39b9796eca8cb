"""Output sinks for aggregated documents."""

from .base import DocumentSink
from .console import ConsoleSink
from .file import FileSink
from .in_memory import InMemorySink
from .json_array import JSONArrayWriter, dump_array, encode_document

__all__ = [
    "DocumentSink",
    "ConsoleSink",
    "FileSink",
    "InMemorySink",
    "JSONArrayWriter",
    "dump_array",
    "encode_document",
]
