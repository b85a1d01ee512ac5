from __future__ import annotations

from pathlib import Path

import pytest

from article_parser.articles import ArticleLibrary, load_articles_from_directory, slugify
from article_parser.metadata import ArticleFormatError


def _article(title: str, *, published: str | None = None, tags: str | None = None) -> str:
    lines = ["<!--", f"title: {title}"]
    if published is not None:
        lines.append(f"published: {published}")
    if tags is not None:
        lines.append(f"tags: {tags}")
    lines.extend(["-->", f"Content of {title}.", ""])
    return "\n".join(lines)


@pytest.fixture
def posts_dir(tmp_path: Path, write_article) -> Path:
    write_article("posts/older.md", _article("Older", published="2019-06-01", tags="Python news"))
    write_article("posts/newer.md", _article("Newer", published="2021-02-03 08:00", tags="python"))
    write_article("posts/draft.md", _article("Draft", tags="Zürich zurich"))
    write_article("posts/notes.txt", "not an article")
    write_article("posts/archive/ancient.md", _article("Ancient", published="2001-01-01"))
    return tmp_path / "posts"


def test_slugify() -> None:
    assert slugify("Zürich Local Culture!") == "zurich-local-culture"
    with pytest.raises(ValueError):
        slugify("!!!")


def test_load_articles_sorted_by_file_name(posts_dir: Path) -> None:
    articles = load_articles_from_directory(posts_dir)

    assert [a.id for a in articles] == ["draft", "newer", "older"]


def test_load_articles_recursive(posts_dir: Path) -> None:
    articles = load_articles_from_directory(posts_dir, recursive=True)

    assert sorted(a.id for a in articles) == ["ancient", "draft", "newer", "older"]


def test_load_articles_with_pattern(posts_dir: Path, write_article) -> None:
    write_article("posts/page.html", _article("Page"))

    articles = load_articles_from_directory(posts_dir, pattern="*.html")

    assert [a.id for a in articles] == ["page"]


def test_load_articles_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_articles_from_directory(tmp_path / "nope")


def test_load_articles_propagates_format_errors(posts_dir: Path, write_article) -> None:
    write_article("posts/broken.md", "<!--\ntitle: Broken\n")

    with pytest.raises(ArticleFormatError) as exc_info:
        load_articles_from_directory(posts_dir)

    assert exc_info.value.reason == ArticleFormatError.MISSING_CLOSE_FENCE
    assert exc_info.value.path.endswith("broken.md")


def test_library_lookups(posts_dir: Path) -> None:
    library = ArticleLibrary.from_directory(posts_dir)

    assert len(library) == 3
    assert library.get("newer").metadata.title == "Newer"
    assert library.get("missing") is None
    assert [a.id for a in library.newest_first()] == ["newer", "older", "draft"]
    assert [a.id for a in library.with_tag("PYTHON")] == ["newer", "older"]
    assert library.with_tag("unknown") == []
    assert library.tags() == ["Zürich", "python", "news"]


def test_library_rejects_duplicate_ids(tmp_path: Path, write_article) -> None:
    write_article("a/hello.md", _article("One"))
    write_article("b/hello.md", _article("Two"))

    with pytest.raises(ValueError, match="Duplicate article id 'hello'"):
        ArticleLibrary.from_directory(tmp_path, recursive=True)


def test_newest_first_mixes_naive_and_aware_dates(tmp_path: Path, write_article) -> None:
    write_article("naive.md", _article("Naive", published="2020-01-01 12:00"))
    write_article("aware.md", _article("Aware", published="2020-01-02T00:00:00+02:00"))

    library = ArticleLibrary.from_directory(tmp_path)

    assert [a.id for a in library.newest_first()] == ["aware", "naive"]


def test_package_exports() -> None:
    import article_parser

    assert article_parser.ArticleLibrary is ArticleLibrary
    assert article_parser.ArticleFormatError is ArticleFormatError
    assert callable(article_parser.parse_article_file)
