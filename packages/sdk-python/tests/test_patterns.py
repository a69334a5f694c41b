"""Tests for patterns.py - brace expansion and file globbing."""

import os
from pathlib import Path

from stackplan_sdk import patterns
from stackplan_sdk.patterns import compile_glob, expand_braces, find_matching_files


class TestExpandBraces:
    """Tests for expand_braces."""

    def test_no_braces(self):
        assert expand_braces("src/*.py") == ["src/*.py"]

    def test_single_group(self):
        assert expand_braces("**/index.{ts,tsx,js,jsx}") == [
            "**/index.ts",
            "**/index.tsx",
            "**/index.js",
            "**/index.jsx",
        ]

    def test_multiple_groups(self):
        assert expand_braces("{src,lib}/*.{ts,js}") == [
            "src/*.ts",
            "src/*.js",
            "lib/*.ts",
            "lib/*.js",
        ]


class TestFindMatchingFiles:
    """Tests for find_matching_files."""

    def test_recursive_includes_root(self, tmp_path):
        (tmp_path / "index.ts").write_text("")
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "index.js").write_text("")
        (tmp_path / "src" / "main.ts").write_text("")

        matches = find_matching_files("**/index.{ts,js}", tmp_path)

        assert matches == [tmp_path / "index.ts", tmp_path / "src" / "index.js"]

    def test_sorted_and_unique(self, tmp_path):
        (tmp_path / "b.ts").write_text("")
        (tmp_path / "a.ts").write_text("")

        matches = find_matching_files("{*.ts,a.ts}", tmp_path)

        assert matches == [tmp_path / "a.ts", tmp_path / "b.ts"]

    def test_hidden_paths_skipped(self, tmp_path):
        (tmp_path / ".cache").mkdir()
        (tmp_path / ".cache" / "index.ts").write_text("")
        (tmp_path / ".index.ts").write_text("")

        assert find_matching_files("**/*.ts", tmp_path) == []

    def test_directories_skipped(self, tmp_path):
        (tmp_path / "pixi.toml").mkdir()

        assert find_matching_files("pixi.toml", tmp_path) == []

    def test_empty_pattern(self, tmp_path):
        (tmp_path / "a.ts").write_text("")

        assert find_matching_files("", tmp_path) == []

    def test_single_pruned_walk(self, tmp_path, monkeypatch):
        (tmp_path / ".git" / "objects").mkdir(parents=True)
        (tmp_path / ".git" / "objects" / "index.ts").write_text("")
        (tmp_path / "index.ts").write_text("")
        visited = []
        real_walk = os.walk

        def recording_walk(top, *args, **kwargs):
            for entry in real_walk(top, *args, **kwargs):
                visited.append(Path(entry[0]))
                yield entry

        monkeypatch.setattr(patterns.os, "walk", recording_walk)

        matches = find_matching_files("**/index.{ts,tsx,js,jsx}", tmp_path)

        assert matches == [tmp_path / "index.ts"]
        assert visited == [tmp_path]

    def test_symlinked_file_keeps_its_path(self, tmp_path):
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "main.ts").write_text("")
        (tmp_path / "index.ts").symlink_to(tmp_path / "lib" / "main.ts")

        assert find_matching_files("**/index.ts", tmp_path) == [tmp_path / "index.ts"]


class TestCompileGlob:
    """Tests for compile_glob."""

    def test_double_star_matches_root_and_nested(self):
        regex = compile_glob("**/index.ts")

        assert regex.fullmatch("index.ts")
        assert regex.fullmatch("a/b/index.ts")
        assert not regex.fullmatch("a/xindex.ts")

    def test_single_star_stays_in_segment(self):
        regex = compile_glob("src/*.ts")

        assert regex.fullmatch("src/main.ts")
        assert not regex.fullmatch("src/lib/main.ts")
        assert not regex.fullmatch("main.ts")

    def test_trailing_double_star(self):
        assert compile_glob("data/**").fullmatch("data/a/b.csv")

    def test_literal_characters_escaped(self):
        regex = compile_glob("pixi.toml")

        assert regex.fullmatch("pixi.toml")
        assert not regex.fullmatch("pixiXtoml")
