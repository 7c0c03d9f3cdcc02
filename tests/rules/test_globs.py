"""Tests for glob-to-regex compilation."""

import pytest

from skill_activation.rules.globs import GlobError, compile_glob, translate_glob


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("src/app/api/**/*.ts", "src/app/api/auth/route.ts", True),
        ("src/app/api/**/*.ts", "src/app/api/route.ts", True),
        ("src/app/api/**/*.ts", "src/app/api/a/b/c/route.ts", True),
        ("src/app/api/**/*.ts", "src/app/api.ts", False),
        ("src/app/api/**/*.ts", "lib/api/route.ts", False),
        ("src/*.py", "src/main.py", True),
        ("src/*.py", "src/pkg/main.py", False),
        ("**/*.py", "main.py", True),
        ("**/*.py", "a/b/main.py", True),
        ("prisma/**", "prisma/schema.prisma", True),
        ("prisma/**", "prisma/migrations/001/init.sql", True),
        ("file?.md", "file1.md", True),
        ("file?.md", "file10.md", False),
        ("file?.md", "file/.md", False),
        ("[abc].txt", "b.txt", True),
        ("[!abc].txt", "d.txt", True),
        ("[!abc].txt", "a.txt", False),
        ("docs/v1.0/*.md", "docs/v1x0/readme.md", False),
    ],
)
def test_glob_semantics(pattern: str, path: str, expected: bool) -> None:
    assert compile_glob(pattern).matches(path) is expected


def test_glob_is_anchored_at_both_ends() -> None:
    glob = compile_glob("src/*.ts")
    assert not glob.matches("x/src/a.ts")
    assert not glob.matches("src/a.tsx")


def test_leading_dot_slash_in_pattern_is_ignored() -> None:
    assert compile_glob("./src/*.ts").matches("src/a.ts")


def test_compiled_glob_keeps_source() -> None:
    assert compile_glob("src/**").source == "src/**"


def test_compile_is_cached() -> None:
    assert compile_glob("lib/**/*.rs") is compile_glob("lib/**/*.rs")


def test_unterminated_class_is_rejected() -> None:
    with pytest.raises(GlobError):
        translate_glob("src/[abc.ts")


def test_empty_pattern_is_rejected() -> None:
    with pytest.raises(GlobError):
        translate_glob("")
