"""
Test suite for indexable path filtering, language detection and truncation.

System role: Verification of the indexer path policy
"""

import pytest

from repo_audit.core.indexing.filters import (
    is_indexable,
    size_ceiling,
    truncate_content,
)
from repo_audit.core.indexing.languages import detect_language


class TestIsIndexable:
    """Test suite for is_indexable."""

    @pytest.mark.parametrize(
        "path",
        ["src/app.py", "README.md", "config/settings.yaml", "Dockerfile", "web/index.tsx"],
    )
    def test_is_indexable_should_accept_source_and_config_files(self, path: str) -> None:
        assert is_indexable(path)

    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/react/index.js",
            "dist/bundle.js",
            "build/output.txt",
            ".git/HEAD",
        ],
    )
    def test_is_indexable_should_reject_excluded_directories(self, path: str) -> None:
        assert not is_indexable(path)

    @pytest.mark.parametrize(
        "path",
        ["assets/logo.png", "docs/manual.PDF", "fonts/inter.woff2", "lib/native.so", "data/app.sqlite"],
    )
    def test_is_indexable_should_reject_binary_extensions(self, path: str) -> None:
        assert not is_indexable(path)

    def test_is_indexable_should_only_exclude_prefix_at_root(self) -> None:
        """Test nested directories sharing an excluded name are kept."""
        assert is_indexable("src/build/helpers.py")


class TestSizeCeiling:
    """Test suite for size_ceiling."""

    def test_size_ceiling_should_use_larger_limit_for_config_files(self) -> None:
        assert size_ceiling("package.json", 100, 200) == 200
        assert size_ceiling("deploy/values.YML", 100, 200) == 200

    def test_size_ceiling_should_use_regular_limit_for_source_files(self) -> None:
        assert size_ceiling("main.go", 100, 200) == 100


class TestTruncateContent:
    """Test suite for truncate_content."""

    def test_truncate_should_return_small_content_unchanged(self) -> None:
        content = "print('hi')"

        assert truncate_content(content, 1024) is content

    def test_truncate_should_cut_and_append_marker_with_original_size(self) -> None:
        """Test oversized content keeps its head and states the KB size."""
        # Arrange
        content = "a" * 2048

        # Act
        result = truncate_content(content, 1024)

        # Assert
        assert result.startswith("a" * 1024)
        assert not result.startswith("a" * 1025)
        assert "content truncated (2.0KB total)" in result

    def test_truncate_should_not_split_multibyte_characters(self) -> None:
        """Test a ceiling landing mid-character drops the partial character."""
        content = "é" * 10  # 20 bytes

        result = truncate_content(content, 5)

        assert result.startswith("éé")
        assert "�" not in result


class TestDetectLanguage:
    """Test suite for detect_language."""

    @pytest.mark.parametrize(
        "path,language",
        [
            ("src/app.py", "python"),
            ("web/App.TSX", "typescript"),
            ("Dockerfile", "dockerfile"),
            ("infra/Makefile", "makefile"),
            ("schema.graphql", "graphql"),
        ],
    )
    def test_detect_language_should_map_known_names_and_extensions(self, path: str, language: str) -> None:
        assert detect_language(path) == language

    def test_detect_language_should_return_none_without_extension(self) -> None:
        assert detect_language("LICENSE") is None
