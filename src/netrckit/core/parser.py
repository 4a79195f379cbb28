"""
netrc record parser.

Consumes the raw slices produced by the lexer and assembles them into a
Document. The parser is a small state machine:
- record: the entry being filled in (machine or default)
- default_seen: whether ``default`` appeared already
- macro: the ``macdef`` token whose body is being collected
- line: current 1-based line, counted from the newlines consumed

The first structural error aborts the parse.
"""

import logging
import re
from typing import Optional, Union

from .document import Document, Record
from .errors import (
    DefaultOrderError,
    DuplicateDefaultError,
    NetrcSyntaxError,
    UnexpectedFieldError,
)
from .lexer import Lexer, Token, TokenType, classify
from .writer import decode


logger = logging.getLogger("netrckit.parser")

# A blank line ends a macro body.
BLANK_LINE = re.compile(r"\n\r?\n")

FIELD_NAMES = {
    TokenType.LOGIN: "login",
    TokenType.PASSWORD: "password",
    TokenType.ACCOUNT: "account",
}


class Parser:
    """
    State machine turning netrc text into a Document.
    """

    def __init__(self, content: str, line: int = 1):
        self.lexer = Lexer(content)
        self.line = line
        self.document = Document()

        self.record: Optional[Record] = None
        self.default_seen = False
        self.macro: Optional[Token] = None

    def parse(self) -> Document:
        """
        Parse the whole input.

        Returns:
            Document holding every token of the input

        Raises:
            NetrcError: On the first structural error
        """
        for raw in self.lexer:
            self.line += raw.count('\n')

            if self.macro is not None:
                blank = BLANK_LINE.search(raw)
                if blank is None:
                    # Macro bodies are free text
                    self.macro.raw_value += raw
                    continue
                self._close_macro(raw[:blank.start() + 1])

            token = classify(raw, self.line)

            if token.type == TokenType.MACDEF:
                token.macro_name = self._read_value(token, "macdef")
                token.raw_value = ""
                self.macro = token
            elif token.type == TokenType.DEFAULT:
                self._start_default(token)
            elif token.type == TokenType.MACHINE:
                self._start_machine(token)
            elif token.type in FIELD_NAMES:
                self._set_field(token, FIELD_NAMES[token.type])

            self.document.tokens.append(token)

        if self.macro is not None:
            self._close_macro("")
        self._close_record()

        logger.debug(
            "Parsed %d records, %d macros, %d tokens",
            len(self.document), len(self.document.macros), len(self.document.tokens),
        )
        return self.document

    def _read_value(self, token: Token, keyword: str) -> str:
        """Read the word following a keyword into the token."""
        raw = self.lexer.next_raw()
        if raw is not None:
            self.line += raw.count('\n')
        if raw is None or not raw.strip():
            raise NetrcSyntaxError(f"missing value after {keyword}", self.line)

        token.raw_value = raw
        token.value = raw.strip()
        return token.value

    def _close_record(self):
        if self.record is not None:
            self.document.add_record(self.record)
            self.record = None

    def _close_macro(self, tail: str):
        body = (self.macro.raw_value + tail).lstrip("\r\n")
        self.macro.value = body
        self.document.add_macro(self.macro.macro_name, body)
        self.macro = None

    def _new_record(self, token: Token) -> Record:
        self._close_record()
        self.record = Record()
        self.record.bind("name", token)
        return self.record

    def _start_default(self, token: Token):
        if self.default_seen:
            raise DuplicateDefaultError(self.line)

        self._new_record(token)
        self.default_seen = True

    def _start_machine(self, token: Token):
        if self.default_seen:
            raise DefaultOrderError(self.line)

        record = self._new_record(token)
        record.name = self._read_value(token, "machine")

    def _set_field(self, token: Token, field: str):
        record = self.record
        if record is None or record.token(field) is not None:
            raise UnexpectedFieldError(field, self.line)

        setattr(record, field, self._read_value(token, field))
        record.bind(field, token)


def parse(data: Union[bytes, str]) -> Document:
    """
    Parse netrc content.

    Args:
        data: File content as bytes or text

    Returns:
        Document whose serialize() reproduces data

    Raises:
        NetrcError: If the content is not a valid netrc file
    """
    return Parser(decode(data)).parse()
