"""
In-memory netrc document.

A Document owns the flat token list that serialization walks, plus two views
derived from it:
- records: machine entries in file order, the default entry last
- macros: macro name -> body

Each Record keeps references to the very Token objects stored in the token
list, so editing a field rewrites only that token's value bytes and leaves
every other byte of the file alone.

Structural edits (create, remove, inserting a field token) hold the document
lock. Lookups, iteration and serialization are not synchronized; callers that
read while another thread edits must coordinate around the whole document.
"""

import logging
import threading
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .errors import DuplicateDefaultError
from .lexer import Token, TokenType, leading_space
from .writer import encode, write


logger = logging.getLogger("netrckit.document")

FIELDS = ("login", "password", "account")

FIELD_TOKEN_TYPES = {
    "login": TokenType.LOGIN,
    "password": TokenType.PASSWORD,
    "account": TokenType.ACCOUNT,
}


class Record:
    """
    One machine entry.

    An empty name marks the ``default`` entry, which matches any machine
    without an entry of its own.
    """

    def __init__(self, name: str = "", login: str = "", password: str = "", account: str = ""):
        self.name = name
        self.login = login
        self.password = password
        self.account = account

        # "name", "login", "password", "account" -> backing token
        self._tokens: Dict[str, Token] = {}
        self._document: Optional["Document"] = None

    def is_default(self) -> bool:
        """True if this is the ``default`` entry."""
        return self.name == ""

    def key(self) -> Tuple[str, str, str]:
        return (self.login, self.account, self.name)

    def tokens(self) -> List[Token]:
        """Backing tokens that exist, in field order."""
        return [
            self._tokens[field]
            for field in ("name",) + FIELDS
            if field in self._tokens
        ]

    def token(self, field: str) -> Optional[Token]:
        """Backing token of a field ("name", "login", ...), if any."""
        return self._tokens.get(field)

    def bind(self, field: str, token: Token):
        self._tokens[field] = token

    def update_field(self, field: str, value: str):
        """
        Set login, password or account, rewriting the backing token.

        Args:
            field: One of "login", "password", "account"
            value: New value; an empty value drops the keyword on output
        """
        if self._document is None:
            _check_field(field)
            setattr(self, field, value)
            return
        self._document.update_field(self, field, value)

    def update_login(self, value: str):
        self.update_field("login", value)

    def update_password(self, value: str):
        self.update_field("password", value)

    def update_account(self, value: str):
        self.update_field("account", value)

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self.name == other.name
            and self.login == other.login
            and self.password == other.password
            and self.account == other.account
        )

    __hash__ = None

    def __repr__(self):
        name = "default" if self.is_default() else self.name
        password = "***" if self.password else ""
        return f"Record({name}, login={self.login!r}, password={password!r}, account={self.account!r})"


class Document:
    """
    Parsed netrc file: token stream, records and macros kept in sync.
    """

    def __init__(self):
        self.tokens: List[Token] = []
        self._records: List[Record] = []
        self._macros: Dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def records(self) -> List[Record]:
        """Records in file order (a copy)."""
        return list(self._records)

    @property
    def macros(self) -> Dict[str, str]:
        """Macro name -> body (a copy)."""
        return dict(self._macros)

    @property
    def default(self) -> Optional[Record]:
        """The ``default`` record, if any."""
        for record in self._records:
            if record.is_default():
                return record
        return None

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __len__(self):
        return len(self._records)

    def visit(self, func: Callable[[Record], None]):
        """Call func on every record in order; the first exception stops the walk."""
        for record in self._records:
            func(record)

    def find_record(self, name: str) -> Optional[Record]:
        """
        Find the record for a machine.

        Args:
            name: Machine name

        Returns:
            The record named name, else the default record, else None
        """
        fallback = None
        for record in self._records:
            if record.name == name:
                return record
            if record.is_default():
                fallback = record
        return fallback

    def create_record(self, name: str, login: str = "", password: str = "", account: str = "") -> Record:
        """
        Add a new record.

        The record is inserted in front of the default record if there is
        one, otherwise appended. Fields with an empty value get no token.
        An empty name creates the default record.

        Returns:
            The new record
        """
        with self._lock:
            record = Record(name, login, password, account)
            record._document = self

            default = self.default
            if default is None:
                index = len(self.tokens)
            elif record.is_default():
                raise DuplicateDefaultError()
            else:
                index = _index_of(self.tokens, default._tokens["name"])

            prefix = self._separator(index)
            if record.is_default():
                record._tokens["name"] = Token(
                    type=TokenType.DEFAULT,
                    raw_prefix=prefix + "default",
                )
            else:
                record._tokens["name"] = Token(
                    type=TokenType.MACHINE,
                    raw_prefix=prefix + "machine",
                    raw_value=" " + name,
                    value=name,
                )
            for field in FIELDS:
                value = getattr(record, field)
                if value:
                    record._tokens[field] = _field_token(field, value)

            if default is None:
                self._records.append(record)
            else:
                default_token = default._tokens["name"]
                if not default_token.raw_prefix[:1].isspace():
                    # default was the first word of the file
                    default_token.raw_prefix = "\n" + default_token.raw_prefix
                self._records.insert(self._records.index(default), record)
            self.tokens[index:index] = record.tokens()

        logger.debug("Created record %r", record)
        return record

    def remove_record(self, name: str) -> Optional[Record]:
        """
        Remove the first record named name along with its tokens.

        Returns:
            The removed record, or None if no record has that name
        """
        with self._lock:
            for i, record in enumerate(self._records):
                if record.name != name:
                    continue
                # Document order, so a macro terminator can move past them all
                ordered = sorted(record.tokens(), key=lambda t: _index_of(self.tokens, t))
                for token in ordered:
                    self._delete_token(_index_of(self.tokens, token))
                del self._records[i]
                record._document = None
                logger.debug("Removed record %r", record)
                return record
        return None

    def update_field(self, record: Record, field: str, value: str):
        """
        Set a field of record and rewrite its backing token in place.

        Only the value part of the token changes: the whitespace and keyword
        bytes in front of it are kept. A record without a token for field
        gets a new one right after its last token.
        """
        _check_field(field)
        with self._lock:
            old = getattr(record, field)
            setattr(record, field, value)

            token = record._tokens.get(field)
            if token is not None:
                _replace_value(token, old, value)
            elif value:
                token = _field_token(field, value)
                last = max(
                    _index_of(self.tokens, t) for t in record.tokens()
                )
                self.tokens.insert(last + 1, token)
                record._tokens[field] = token

        logger.debug("Updated %s of %r", field, record)

    def _delete_token(self, index: int):
        """
        Drop the token at index.

        If a macro definition comes right before it, the whitespace in front
        of the dropped keyword ends that macro body, so it is handed on to
        the next token.
        """
        token = self.tokens.pop(index)
        if index == 0 or self.tokens[index - 1].type != TokenType.MACDEF:
            return

        lead = leading_space(token.raw_prefix)
        if index < len(self.tokens):
            following = self.tokens[index]
            following.raw_prefix = lead + following.raw_prefix
        elif lead:
            self.tokens.append(Token(type=TokenType.WHITESPACE, raw_prefix=lead))

    def add_record(self, record: Record):
        """Append a parsed record and attach it to this document."""
        record._document = self
        self._records.append(record)

    def add_macro(self, name: str, body: str):
        self._macros[name] = body

    def _separator(self, index: int) -> str:
        """Whitespace in front of a record inserted at token position index."""
        if index == 0:
            return ""
        before = self.tokens[index - 1]
        if before.type == TokenType.MACDEF and not write([before]).endswith("\n"):
            # The macro body needs a blank line to end
            return "\n\n"
        return "\n"

    def to_text(self) -> str:
        """Serialize to text."""
        return write(self.tokens)

    def serialize(self) -> bytes:
        """Serialize to bytes; byte-identical to the input if unedited."""
        return encode(self.to_text())

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented

        mine = {record.key(): record for record in self._records}
        theirs = {record.key(): record for record in other._records}
        if mine != theirs:
            return False

        return self._macros == other._macros

    __hash__ = None

    def __repr__(self):
        return f"Document({len(self._records)} records, {len(self._macros)} macros)"


def _check_field(field: str):
    if field not in FIELDS:
        raise ValueError(f"unknown field {field!r}; expected one of {', '.join(FIELDS)}")


def _field_token(field: str, value: str) -> Token:
    return Token(
        type=FIELD_TOKEN_TYPES[field],
        raw_prefix="\n\t" + field,
        raw_value=" " + value,
        value=value,
    )


def _index_of(tokens: List[Token], token: Token) -> Optional[int]:
    """Position of token in tokens, by identity."""
    for i, candidate in enumerate(tokens):
        if candidate is token:
            return i
    return None


def _replace_value(token: Token, old: str, new: str):
    token.value = new
    raw = token.raw_value
    index = raw.rfind(old) if old else -1
    if index < 0:
        # Value was cleared earlier; only its leading whitespace is left
        token.raw_value = raw + new
    else:
        token.raw_value = raw[:index] + new + raw[index + len(old):]
