"""
netrckit core modules.

Includes:
- lexer: Lossless tokenizer and keyword classifier
- parser: Record state machine
- document: Records, macros and the editing API
- writer: Token stream serialization
- files: netrc file location, reading and writing
- errors: Parse error types
"""

from . import errors
from . import lexer
from . import writer
from . import document
from . import parser
from . import files

__all__ = [
    "errors",
    "lexer",
    "writer",
    "document",
    "parser",
    "files",
]
