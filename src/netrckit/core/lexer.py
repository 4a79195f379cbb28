"""
Lossless netrc tokenizer.

Splits netrc text into raw slices that keep every byte of the input. Each
slice is the whitespace run that precedes a word plus the word itself, so
joining the slices gives back the original text:

    "".join(Lexer(content)) == content

Two scanning modes exist. A word that starts with '#' runs to the end of the
line (comments are free text); any other word stops at the next whitespace.
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Optional

from .errors import NetrcSyntaxError


class TokenType(Enum):
    """Token types for netrc parsing."""
    MACHINE = "machine"
    DEFAULT = "default"
    LOGIN = "login"
    PASSWORD = "password"
    ACCOUNT = "account"
    MACDEF = "macdef"
    COMMENT = "comment"
    WHITESPACE = "whitespace"


KEYWORDS = MappingProxyType({
    "machine": TokenType.MACHINE,
    "default": TokenType.DEFAULT,
    "login": TokenType.LOGIN,
    "password": TokenType.PASSWORD,
    "account": TokenType.ACCOUNT,
    "macdef": TokenType.MACDEF,
    "#": TokenType.COMMENT,
})

# Keyword types whose token carries a value of one of a record's fields.
FIELD_TYPES = frozenset({
    TokenType.MACHINE,
    TokenType.LOGIN,
    TokenType.PASSWORD,
    TokenType.ACCOUNT,
})

# Leading whitespace plus either a comment running to end of line or a single
# word. The bare whitespace branch only matches trailing whitespace at EOF.
_RAW_TOKEN = re.compile(r"\s*(?:#[^\n]*|\S+)|\s+")


@dataclass(eq=False)
class Token:
    """
    A single token in the netrc document.

    ``raw_prefix`` holds the whitespace and the keyword text exactly as read.
    ``raw_value`` holds the bytes of the value word, including the whitespace
    in front of it. For a macro definition ``raw_value`` holds the macro body.
    """
    type: TokenType
    raw_prefix: str
    raw_value: str = ""
    value: str = ""
    macro_name: Optional[str] = None

    def __repr__(self):
        if self.type in (TokenType.COMMENT, TokenType.WHITESPACE):
            return f"Token({self.type.value}, {self.raw_prefix[:20]!r})"
        if self.type == TokenType.MACDEF:
            return f"Token({self.type.value}, {self.macro_name})"
        if self.type == TokenType.PASSWORD:
            return f"Token({self.type.value}, ***)"
        return f"Token({self.type.value}, {self.value})"


class Lexer:
    """
    Forward-only scanner over netrc text.

    Iterating yields raw slices until the input is exhausted.
    ``next_raw()`` may be interleaved with iteration to pull the value word
    that follows a keyword.
    """

    def __init__(self, content: str):
        self.content = content
        self.pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        raw = self.next_raw()
        if raw is None:
            raise StopIteration
        return raw

    def next_raw(self) -> Optional[str]:
        """
        Scan the next raw slice.

        Returns:
            Leading whitespace plus the next word or comment, the trailing
            whitespace of the input, or None once nothing is left.
        """
        match = _RAW_TOKEN.match(self.content, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group()


def first_word(raw: str) -> str:
    """Return the first whitespace-delimited word of a raw slice."""
    words = raw.split(None, 1)
    return words[0] if words else ""


def classify(raw: str, line: Optional[int] = None) -> Token:
    """
    Build a token from a raw slice by classifying its first word.

    Args:
        raw: Raw slice as returned by the lexer
        line: Line number used if the word is rejected

    Returns:
        Token whose raw_prefix is the whole slice

    Raises:
        NetrcSyntaxError: If the word is neither a keyword nor a comment
    """
    word = first_word(raw)
    kind = KEYWORDS.get(word)

    if kind is None:
        if not word:
            # Whitespace only, happens at EOF
            kind = TokenType.WHITESPACE
        elif word.startswith('#'):
            kind = TokenType.COMMENT
        else:
            raise NetrcSyntaxError(f"keyword expected; got {word}", line)

    return Token(type=kind, raw_prefix=raw)



def leading_space(raw: str) -> str:
    """Return the whitespace run at the start of a raw slice."""
    return raw[:len(raw) - len(raw.lstrip())]
