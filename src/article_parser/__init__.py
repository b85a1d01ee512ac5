"""Public package exports for article file parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .articles import ArticleLibrary, load_articles_from_directory, slugify
    from .file_parser import Article, parse_article_file
    from .metadata import ArticleFormatError, ArticleMetadata, parse_metadata

__all__ = [
    "Article",
    "ArticleFormatError",
    "ArticleLibrary",
    "ArticleMetadata",
    "load_articles_from_directory",
    "parse_article_file",
    "parse_metadata",
    "slugify",
]


def __getattr__(name: str) -> Any:  # pragma: no cover - thin import wrapper
    if name in {"ArticleFormatError", "ArticleMetadata", "parse_metadata"}:
        from . import metadata

        return getattr(metadata, name)

    if name == "Article" or name == "parse_article_file":
        from .file_parser import Article, parse_article_file

        return Article if name == "Article" else parse_article_file

    if name in {"ArticleLibrary", "load_articles_from_directory", "slugify"}:
        from . import articles

        return getattr(articles, name)

    raise AttributeError(name)


def __dir__() -> list[str]:  # pragma: no cover - module metadata
    return sorted(__all__ + ["articles", "cli", "file_parser", "metadata"])
