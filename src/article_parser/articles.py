"""Helpers for loading and querying a directory of article files."""

from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional
import re
import unicodedata

from .file_parser import Article, TextOpener, open_text_file, parse_article_file

_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]+")


def slugify(value: str) -> str:
    """Convert ``value`` into a URL-friendly slug."""

    normalized = unicodedata.normalize("NFKD", value)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    lowered = ascii_text.lower()
    hyphenated = _SLUG_INVALID_RE.sub("-", lowered)
    cleaned = hyphenated.strip("-")
    cleaned = re.sub(r"-+", "-", cleaned)
    if not cleaned:
        raise ValueError("Slug cannot be derived from an empty string.")
    return cleaned


def _sort_key(value: datetime) -> float:
    # Naive and aware datetimes cannot be compared directly.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def load_articles_from_directory(
    directory: str | Path,
    *,
    pattern: str = "*.md",
    recursive: bool = False,
    open_text: TextOpener = open_text_file,
) -> List[Article]:
    """Parse every article file in ``directory``.

    Parameters
    ----------
    directory:
        Directory that contains article documents. Files are discovered using
        ``Path.glob`` and sorted for deterministic processing.
    pattern:
        Glob pattern used to match files. Defaults to ``"*.md"``.
    recursive:
        When ``True``, search recursively using ``**/``. Defaults to ``False``.
    open_text:
        Stream source forwarded to :func:`parse_article_file`.
    """

    root = Path(directory)
    if not root.is_dir():
        raise ValueError(
            f"Directory '{directory}' does not exist or is not a directory."
        )

    glob_pattern = f"**/{pattern}" if recursive else pattern
    files = sorted(path for path in root.glob(glob_pattern) if path.is_file())

    return [parse_article_file(path, open_text=open_text) for path in files]


class ArticleLibrary:
    """In-memory collection of parsed articles keyed by their identifier."""

    def __init__(self, articles: Iterable[Article]) -> None:
        self._articles: "OrderedDict[str, Article]" = OrderedDict()
        for article in articles:
            article_id = article.id
            if article_id is None:
                raise ValueError("Articles must have an id to be added to a library.")
            if article_id in self._articles:
                raise ValueError(f"Duplicate article id '{article_id}'.")
            self._articles[article_id] = article

    @classmethod
    def from_directory(cls, directory: str | Path, **options: Any) -> "ArticleLibrary":
        """Build a library from :func:`load_articles_from_directory`."""

        return cls(load_articles_from_directory(directory, **options))

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self) -> Iterator[Article]:
        return iter(self._articles.values())

    def get(self, article_id: str) -> Optional[Article]:
        return self._articles.get(article_id)

    def newest_first(self) -> List[Article]:
        """Return articles by publish date, newest first.

        Articles without a publish date come last, in load order.
        """

        dated = [a for a in self if a.metadata.publish_datetime is not None]
        undated = [a for a in self if a.metadata.publish_datetime is None]
        dated.sort(key=lambda a: _sort_key(a.metadata.publish_datetime), reverse=True)
        return dated + undated

    def with_tag(self, tag: str) -> List[Article]:
        """Return the articles tagged with ``tag`` (case-insensitive), newest first."""

        wanted = tag.strip().lower()
        return [
            article
            for article in self.newest_first()
            if any(t.lower() == wanted for t in article.metadata.tags)
        ]

    def tags(self) -> List[str]:
        """Return distinct tags in order of first appearance, de-duplicated by slug."""

        unique: Dict[str, str] = OrderedDict()
        for article in self:
            for tag in article.metadata.tags:
                try:
                    slug = slugify(tag)
                except ValueError:
                    slug = tag
                unique.setdefault(slug, tag)
        return list(unique.values())
