"""Utilities for parsing article documents with an HTML comment metadata block."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, ContextManager, Dict, TextIO

from .metadata import ArticleFormatError, ArticleMetadata, parse_metadata

TextOpener = Callable[[Path], ContextManager[TextIO]]


@dataclass(slots=True)
class Article:
    """Represents an article with its metadata and trimmed body content."""

    metadata: ArticleMetadata
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.content, str) or not self.content.strip():
            raise ValueError("Article content cannot be empty or whitespace.")

    @property
    def id(self) -> str | None:
        """Return the identifier derived from the source file name."""

        return self.metadata.id

    def to_dict(self, *, include_content: bool = True) -> Dict[str, Any]:
        metadata = self.metadata
        data: Dict[str, Any] = {
            "id": metadata.id,
            "title": metadata.title,
            "author": metadata.author,
            "published": metadata.publish_datetime,
            "lastedited": metadata.last_edited_datetime,
            "tags": list(metadata.tags),
        }
        if include_content:
            data["content"] = self.content
        return data


def open_text_file(path: Path) -> TextIO:
    """Open ``path`` for reading as UTF-8, dropping a leading byte-order mark."""

    return path.open("r", encoding="utf-8-sig")


def derive_article_id(path: Path) -> str:
    """Return the file name of ``path`` with its extension text removed.

    Every occurrence of the extension is removed, not only the trailing one,
    so ``notes.md.md`` yields ``notes``.
    """

    return path.name.replace(path.suffix, "")


def parse_article_file(
    file_path: str | os.PathLike[str],
    *,
    open_text: TextOpener = open_text_file,
) -> Article:
    """Parse an article document that starts with a ``<!-- ... -->`` block.

    Parameters
    ----------
    file_path:
        Path to the article document. The first line must be ``<!--`` and the
        metadata block ends at a line that is exactly ``-->``. Everything after
        it is the article content.
    open_text:
        Callable returning a context-managed text stream for a path. Defaults
        to :func:`open_text_file`.

    Returns
    -------
    Article
        The parsed article. ``article.metadata.id`` is the file name without
        its extension.

    Raises
    ------
    ValueError
        If ``file_path`` is ``None``.
    ArticleFormatError
        If the metadata block is malformed or there is no content after it.
    """

    if file_path is None:
        raise ValueError("file_path must not be None.")

    path = Path(file_path)

    with open_text(path) as reader:
        metadata = parse_metadata(reader, str(path))
        content = reader.read().strip()

    if not content:
        raise ArticleFormatError(
            str(path),
            ArticleFormatError.NO_CONTENT,
            f"Cannot parse the file '{path}' to an article, because there was no content.",
        )

    metadata.id = derive_article_id(path)

    return Article(metadata=metadata, content=content)
