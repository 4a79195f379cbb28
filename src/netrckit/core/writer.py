"""
Serialize a netrc token stream back to text.

Untouched tokens are written from their raw bytes, so an unmodified document
reproduces its input exactly:

    serialize(parse(data)) == data
"""

from typing import Iterable, Union

from .lexer import Token, TokenType, leading_space


ENCODING = "utf-8"
# Undecodable bytes round-trip through lone surrogates.
ENCODING_ERRORS = "surrogateescape"

# Types whose raw prefix is written even if the token carries no value.
ALWAYS_WRITTEN = frozenset({
    TokenType.COMMENT,
    TokenType.WHITESPACE,
    TokenType.DEFAULT,
    TokenType.MACDEF,
})


def decode(data: Union[bytes, str]) -> str:
    """Decode raw netrc bytes into text without losing any byte."""
    if isinstance(data, str):
        return data
    return bytes(data).decode(ENCODING, ENCODING_ERRORS)


def encode(text: str) -> bytes:
    """Inverse of decode()."""
    return text.encode(ENCODING, ENCODING_ERRORS)


def write(tokens: Iterable[Token]) -> str:
    """
    Reconstruct netrc text from tokens.

    A field token with an empty value drops its keyword, so clearing a login
    removes the ``login`` keyword from the output. Right after a macro
    definition the whitespace in front of the keyword is still written, since
    it holds the blank line that ends the macro body.

    Args:
        tokens: Tokens in document order

    Returns:
        Text that is identical to the parsed input if nothing was edited
    """
    parts = []
    previous = None
    for token in tokens:
        if token.type in ALWAYS_WRITTEN or token.value:
            parts.append(token.raw_prefix)
        elif previous is not None and previous.type == TokenType.MACDEF:
            parts.append(leading_space(token.raw_prefix))
        if token.type == TokenType.MACDEF:
            parts.append(" " + (token.macro_name or ""))
        parts.append(token.raw_value)
        previous = token
    return "".join(parts)
