"""Command line entry point that prints parsed articles as YAML or JSON."""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml
from dotenv import load_dotenv

from .articles import ArticleLibrary
from .file_parser import Article, parse_article_file


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_articles(
    articles: Sequence[Article],
    *,
    output_format: str = "yaml",
    include_content: bool = False,
) -> str:
    """Serialize ``articles`` to ``"yaml"`` or ``"json"`` text."""

    records: List[Dict[str, Any]] = [
        article.to_dict(include_content=include_content) for article in articles
    ]
    if output_format == "json":
        return json.dumps(records, default=_json_default, ensure_ascii=False, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(records, allow_unicode=True, sort_keys=False)
    raise ValueError(f"Unknown output format '{output_format}'.")


def collect_articles(
    path: Path,
    *,
    pattern: str,
    recursive: bool = False,
    tag: str | None = None,
    verbose: bool = False,
) -> List[Article]:
    """Parse ``path`` as a single file or as a directory of articles."""

    if path.is_file():
        library = ArticleLibrary([parse_article_file(path)])
    else:
        library = ArticleLibrary.from_directory(path, pattern=pattern, recursive=recursive)

    articles = library.with_tag(tag) if tag else library.newest_first()

    if verbose:
        for article in articles:
            print(f"  ✓ Parsed {article.id}: {article.metadata.title or '(untitled)'}", file=sys.stderr)

    return articles


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the command line interface."""

    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Parse article files with a <!-- --> metadata block",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print every article in a directory as YAML
  article-parser posts/

  # Print one article, including its content, as JSON
  article-parser posts/2020-01-01-hello.md --format json --with-content

  # Only articles tagged "news", searching sub-directories
  article-parser posts/ --recursive --tag news

Environment variables:
  ARTICLES_DIR       Default path when PATH is omitted
  ARTICLES_PATTERN   Default glob pattern (default: *.md)
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=os.getenv("ARTICLES_DIR"),
        help="Article file or directory (default: ARTICLES_DIR env var)",
    )
    parser.add_argument(
        "--pattern",
        default=os.getenv("ARTICLES_PATTERN") or "*.md",
        help="Glob pattern for article files in a directory (default: *.md)",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Search sub-directories",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml)",
    )
    parser.add_argument(
        "--tag",
        default=None,
        help="Only include articles with this tag",
    )
    parser.add_argument(
        "--with-content",
        action="store_true",
        help="Include the article content in the output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress",
    )

    args = parser.parse_args(argv)

    if not args.path:
        print("✗ No path given and ARTICLES_DIR is not set.", file=sys.stderr)
        return 2

    try:
        articles = collect_articles(
            Path(args.path),
            pattern=args.pattern,
            recursive=args.recursive,
            tag=args.tag,
            verbose=args.verbose,
        )
    except (ValueError, OSError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(render_articles(articles, output_format=args.output_format, include_content=args.with_content))
    return 0


if __name__ == "__main__":
    sys.exit(main())
