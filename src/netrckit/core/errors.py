"""
Errors raised while parsing or editing a netrc document.

Every parse error aborts the whole parse. The error carries the 1-based line
number at which parsing stopped.
"""

from typing import Optional


BAD_DEFAULT_ORDER = "default token must appear after all machine tokens"


class NetrcError(Exception):
    """Base class for netrc parse and structure errors."""

    def __init__(self, msg: str, line: Optional[int] = None, filename: Optional[str] = None):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.filename = filename

    def __str__(self):
        text = self.msg if self.line is None else f"line {self.line}: {self.msg}"
        if self.filename:
            return f"{self.filename}: {text}"
        return text

    @property
    def bad_default_order(self) -> bool:
        """True if this error reports a machine entry following ``default``."""
        return self.msg == BAD_DEFAULT_ORDER


class NetrcSyntaxError(NetrcError):
    """Unrecognized keyword, or a keyword missing its value."""


class DuplicateDefaultError(NetrcError):
    """A second ``default`` entry."""

    def __init__(self, line: Optional[int] = None, filename: Optional[str] = None):
        super().__init__("multiple default token", line, filename)


class DefaultOrderError(NetrcError):
    """A ``machine`` entry after the ``default`` entry."""

    def __init__(self, line: Optional[int] = None, filename: Optional[str] = None):
        super().__init__(BAD_DEFAULT_ORDER, line, filename)


class UnexpectedFieldError(NetrcError):
    """A login/password/account with no open entry, or set twice on one entry."""

    def __init__(self, field: str, line: Optional[int] = None, filename: Optional[str] = None):
        super().__init__(f"unexpected token {field}", line, filename)
        self.field = field
