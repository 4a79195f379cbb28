"""
netrckit - Lossless netrc editing

Parse a .netrc file, edit its machine entries, and write it back with every
comment, blank line and macro untouched.
"""

__version__ = "0.1.0"

from .core.document import Document, Record
from .core.errors import (
    NetrcError,
    NetrcSyntaxError,
    DuplicateDefaultError,
    DefaultOrderError,
    UnexpectedFieldError,
)
from .core.files import default_path, parse_file, find_machine, save_file
from .core.parser import parse

__all__ = [
    "Document",
    "Record",
    "NetrcError",
    "NetrcSyntaxError",
    "DuplicateDefaultError",
    "DefaultOrderError",
    "UnexpectedFieldError",
    "default_path",
    "parse",
    "parse_file",
    "find_machine",
    "save_file",
]
