"""Unit tests for wildcard path enumeration."""

from pathlib import Path

import pytest

from rasterlite.io import glob_paths, match_wildcard
from rasterlite.io.paths import split_pattern


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A small directory tree of image files.

    tmp/
      a.png
      b.jpg
      ab.png
      sub/
        c.png
        deep/
          d.png
    """
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    for rel in ["a.png", "b.jpg", "ab.png", "sub/c.png", "sub/deep/d.png"]:
        (tmp_path / rel).write_bytes(b"")
    return tmp_path


class TestMatchWildcard:
    """Tests for match_wildcard."""

    @pytest.mark.parametrize(
        ("name", "pattern", "expected"),
        [
            ("photo.png", "*.png", True),
            ("photo.png", "*.jpg", False),
            ("a1.png", "a?.png", True),
            ("a12.png", "a?.png", False),
            ("anything", "*", True),
            ("", "*", True),
            ("x", "", False),
            ("a.b", "a.b", True),
            ("axb", "a.b", False),
            ("[x]", "[x]", True),
            ("abcabc", "*b*c", True),
        ],
    )
    def test_match(self, name: str, pattern: str, expected: bool) -> None:
        """Test '*' and '?' semantics with literal punctuation."""
        assert match_wildcard(name, pattern) is expected


class TestSplitPattern:
    """Tests for split_pattern."""

    def test_base_and_segments(self) -> None:
        """Test splitting at the first wildcard segment."""
        base, segments = split_pattern("a/b/**/c*.png")
        assert base == Path("a/b")
        assert segments == ["**", "c*.png"]

    def test_no_literal_prefix(self) -> None:
        """Test that the base defaults to the current directory."""
        base, segments = split_pattern("*.png")
        assert base == Path(".")
        assert segments == ["*.png"]

    def test_backslashes(self) -> None:
        """Test that backslashes separate segments."""
        base, segments = split_pattern("a\\b\\*.png")
        assert base == Path("a/b")
        assert segments == ["*.png"]

    def test_absolute(self) -> None:
        """Test that an absolute pattern keeps its root."""
        base, _ = split_pattern("/tmp/*.png")
        assert base == Path("/tmp")


class TestGlobPaths:
    """Tests for glob_paths."""

    def test_single_level(self, tree: Path) -> None:
        """Test a wildcard in the last segment."""
        result = glob_paths(f"{tree}/*.png")
        assert result == [str(tree / "a.png"), str(tree / "ab.png")]

    def test_question_mark(self, tree: Path) -> None:
        """Test single-character wildcards."""
        assert glob_paths(f"{tree}/?.*") == [str(tree / "a.png"), str(tree / "b.jpg")]

    def test_directory_wildcard(self, tree: Path) -> None:
        """Test a wildcard in a middle segment."""
        assert glob_paths(f"{tree}/s*/*.png") == [str(tree / "sub" / "c.png")]

    def test_recursive(self, tree: Path) -> None:
        """Test that '**' matches zero or more directories."""
        result = glob_paths(f"{tree}/**/*.png", recursive=True)
        assert result == sorted(
            [
                str(tree / "a.png"),
                str(tree / "ab.png"),
                str(tree / "sub" / "c.png"),
                str(tree / "sub" / "deep" / "d.png"),
            ]
        )

    def test_double_star_literal_without_recursive(self, tree: Path) -> None:
        """Test that '**' is a plain directory name when not recursive."""
        assert glob_paths(f"{tree}/**/*.png") == []
        (tree / "**").mkdir()
        (tree / "**" / "e.png").write_bytes(b"")
        assert glob_paths(f"{tree}/**/*.png") == [str(tree / "**" / "e.png")]

    def test_literal_path(self, tree: Path) -> None:
        """Test a pattern without wildcards."""
        assert glob_paths(f"{tree}/sub") == [str(tree / "sub")]
        assert glob_paths(f"{tree}/missing") == []

    def test_results_sorted_and_unique(self, tree: Path) -> None:
        """Test that overlapping expansions are reported once."""
        result = glob_paths(f"{tree}/**/**/*.png", recursive=True)
        assert result == sorted(set(result))
        assert str(tree / "sub" / "deep" / "d.png") in result

    def test_no_match(self, tree: Path) -> None:
        """Test that nothing matching gives an empty list."""
        assert glob_paths(f"{tree}/*.gif") == []
