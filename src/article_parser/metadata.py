"""Parsing of the ``<!-- ... -->`` metadata block at the top of an article."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, TextIO

from dateutil.parser import parse as parse_date

OPEN_FENCE = "<!--"
CLOSE_FENCE = "-->"


class ArticleFormatError(ValueError):
    """Raised when a file does not have the structure of an article.

    The message always embeds the offending path. ``reason`` is one of the
    ``MISSING_*``/``NO_CONTENT`` constants so callers can branch on it without
    matching message text.
    """

    MISSING_OPEN_FENCE = "missing-open-fence"
    MISSING_CLOSE_FENCE = "missing-close-fence"
    NO_CONTENT = "no-content"

    def __init__(self, path: str, reason: str, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason


@dataclass(slots=True)
class ArticleMetadata:
    """Header values of an article. ``None`` means the key was absent."""

    title: Optional[str] = None
    author: Optional[str] = None
    publish_datetime: Optional[datetime] = None
    last_edited_datetime: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    id: Optional[str] = None


def _try_parse_datetime(value: str) -> datetime | None:
    try:
        return parse_date(value)
    except (ValueError, OverflowError):
        return None


def _set_title(metadata: ArticleMetadata, value: str) -> None:
    metadata.title = value


def _set_author(metadata: ArticleMetadata, value: str) -> None:
    metadata.author = value


def _set_published(metadata: ArticleMetadata, value: str) -> None:
    parsed = _try_parse_datetime(value)
    if parsed is not None:
        metadata.publish_datetime = parsed


def _set_last_edited(metadata: ArticleMetadata, value: str) -> None:
    parsed = _try_parse_datetime(value)
    if parsed is not None:
        metadata.last_edited_datetime = parsed


def _set_tags(metadata: ArticleMetadata, value: str) -> None:
    metadata.tags = [tag for tag in value.split(" ") if tag]


_KEY_HANDLERS: Dict[str, Callable[[ArticleMetadata, str], None]] = {
    "title": _set_title,
    "author": _set_author,
    "published": _set_published,
    "lastedited": _set_last_edited,
    "tags": _set_tags,
}


def _read_line(reader: TextIO) -> str | None:
    """Return the next line without its terminator, or ``None`` at EOF."""

    line = reader.readline()
    if line == "":
        return None
    return line.rstrip("\r\n")


def parse_metadata(reader: TextIO, file_label: str) -> ArticleMetadata:
    """Consume the metadata block from ``reader`` and return its values.

    Parameters
    ----------
    reader:
        Text stream positioned at the start of the article. On return it is
        positioned on the first line after the closing ``-->`` fence.
    file_label:
        Human readable name of the source, only used in error messages.

    Raises
    ------
    ArticleFormatError
        If the first line is not exactly ``<!--`` or the stream ends before a
        line that is exactly ``-->``.
    """

    line = _read_line(reader)
    if line != OPEN_FENCE:
        raise ArticleFormatError(
            file_label,
            ArticleFormatError.MISSING_OPEN_FENCE,
            f"Cannot parse the file '{file_label}' to an article. "
            f"The first line has to be an XML comment tag '{OPEN_FENCE}'.",
        )

    metadata = ArticleMetadata()

    while True:
        line = _read_line(reader)
        if line is None or line == CLOSE_FENCE:
            break

        pair = line.split(":", 1)
        if len(pair) != 2:
            continue

        key = pair[0].strip().lower()
        handler = _KEY_HANDLERS.get(key)
        if handler is not None:
            handler(metadata, pair[1].strip())

    if line != CLOSE_FENCE:
        raise ArticleFormatError(
            file_label,
            ArticleFormatError.MISSING_CLOSE_FENCE,
            f"Cannot parse the file '{file_label}' to an article. "
            f"Couldn't find the closing tag '{CLOSE_FENCE}' of the metadata block.",
        )

    return metadata
