from importlib.resources import files

from .core import FracturedTime, fractured_time
from .storage import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntType,
)
from .util import MILLISECOND, MINUTE, SECOND

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "FracturedTime",
    "fractured_time",
    "IntType",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "docs",
]
