"""
Reading and writing netrc files.

The netrc location comes from the NETRC environment variable when set,
otherwise ~/.netrc. Files are read into memory whole before parsing.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .document import Document, Record
from .errors import NetrcError
from .parser import parse


logger = logging.getLogger("netrckit.files")

NETRC_ENV = "NETRC"
NEW_FILE_MODE = 0o600

PathLike = Union[str, os.PathLike]


def default_path() -> Path:
    """
    Get the netrc path to use when none is given.

    Returns:
        $NETRC if set, else ~/.netrc
    """
    env_path = os.getenv(NETRC_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".netrc"


def parse_file(path: Optional[PathLike] = None) -> Document:
    """
    Read and parse a netrc file.

    Args:
        path: File to read (defaults to default_path())

    Returns:
        Parsed Document

    Raises:
        OSError: If the file cannot be read
        NetrcError: If the file is not valid netrc, with filename set
    """
    path = Path(path) if path is not None else default_path()
    data = path.read_bytes()

    try:
        document = parse(data)
    except NetrcError as e:
        e.filename = str(path)
        raise

    logger.debug("Loaded %s: %r", path, document)
    return document


def find_machine(path: Optional[PathLike], name: str) -> Optional[Record]:
    """
    Parse a netrc file and look up a machine in it.

    Returns:
        The record for name, the default record, or None
    """
    return parse_file(path).find_record(name)


def save_file(document: Document, path: Optional[PathLike] = None):
    """
    Write a document back to disk.

    An existing file keeps its permissions; a new file is created with
    mode 0600 since it holds passwords.
    """
    path = Path(path) if path is not None else default_path()
    data = document.serialize()

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, NEW_FILE_MODE)
    with os.fdopen(fd, 'wb') as f:
        f.write(data)

    logger.debug("Wrote %d bytes to %s", len(data), path)
