"""
Dev-only source text editing for the in-browser content editor.

Edits replace a piece of visible text inside a frontend source file under
``src/``. Matching falls through increasingly lenient strategies:

1. exact substring
2. whitespace/quote-normalised comparison, replaced line by line
3. flexible-whitespace regex (every occurrence)
4. optionally, a search across the page and layout component directories

All paths are relative to ``settings.dev_editor_root``.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from futureedge_shared.config import settings

log = structlog.get_logger(__name__)

EDITABLE_PREFIX = "src/"
SEARCH_DIRS = ("src/pages", "src/components/home", "src/components/layout")
SOURCE_SUFFIXES = (".ts", ".tsx")

_WHITESPACE_RE = re.compile(r"\s+")
_QUOTES = str.maketrans({"\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"'})


class DevEditError(Exception):
    def __init__(self, status_code: int, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details or {}


@dataclass
class EditResult:
    file_path: str
    strategy: str
    message: str = "File updated successfully"


def _root() -> Path:
    return Path(settings.dev_editor_root).resolve()


def normalize_text(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value.translate(_QUOTES)).strip()


def _flexible_pattern(text: str) -> re.Pattern[str]:
    return re.compile(r"\s+".join(re.escape(part) for part in text.split()))


def resolve_editable_path(file_path: str, root: Path | None = None) -> tuple[str, Path]:
    """
    Normalise a client-supplied path and confirm it stays under src/.

    Raises:
        DevEditError: 403 when the path leaves src/.
    """
    root = (root or _root()).resolve()
    normalized = posixpath.normpath(file_path.replace("\\", "/"))
    if normalized.startswith("/") or not normalized.startswith(EDITABLE_PREFIX):
        raise DevEditError(403, "Can only edit files in src/ directory")

    full_path = (root / normalized).resolve()
    if not full_path.is_relative_to(root / "src"):
        raise DevEditError(403, "Can only edit files in src/ directory")
    return normalized, full_path


# ---------------------------------------------------------------------------
# Matching strategies
# ---------------------------------------------------------------------------

def _replace_exact(content: str, old: str, new: str) -> str | None:
    if old in content:
        return content.replace(old, new, 1)
    return None


def _replace_normalized(content: str, old: str, new: str) -> str | None:
    normalized_old = normalize_text(old)
    if normalized_old not in normalize_text(content):
        return None

    pattern = _flexible_pattern(old)
    lines = content.split("\n")
    for i, line in enumerate(lines):
        if normalized_old not in normalize_text(line):
            continue
        match = pattern.search(line)
        if match:
            lines[i] = line[:match.start()] + new + line[match.end():]
            return "\n".join(lines)
    return None


def _replace_flexible(content: str, old: str, new: str) -> str | None:
    pattern = _flexible_pattern(old)
    if not pattern.search(content):
        return None
    return pattern.sub(lambda _m: new, content)


STRATEGIES = (
    ("exact", _replace_exact),
    ("normalized", _replace_normalized),
    ("flexible_regex", _replace_flexible),
)


def apply_strategies(content: str, old: str, new: str) -> tuple[str, str] | None:
    """Return (strategy name, new content) for the first strategy that matches."""
    for name, strategy in STRATEGIES:
        updated = strategy(content, old, new)
        if updated is not None:
            return name, updated
    return None


def _source_files(root: Path) -> list[Path]:
    files: list[Path] = []
    for rel in SEARCH_DIRS:
        directory = root / rel
        if not directory.is_dir():
            continue
        files.extend(
            p for p in sorted(directory.rglob("*"))
            if p.is_file() and p.suffix in SOURCE_SUFFIXES
        )
    return files


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def edit_text(
    file_path: str | None,
    old_text: str | None,
    new_text: str | None,
    *,
    search_in_multiple_files: bool = False,
    root: Path | None = None,
) -> EditResult:
    """
    Replace `old_text` with `new_text` in a source file.

    Raises:
        DevEditError: 400 on missing fields, 403 outside src/, 404 when the
            file or the text cannot be found.
    """
    if not file_path or not (old_text or "").strip() or new_text is None:
        raise DevEditError(400, "Missing required fields")

    root = (root or _root()).resolve()
    normalized, full_path = resolve_editable_path(file_path, root)
    if not full_path.is_file():
        raise DevEditError(404, "File not found")

    old, new = old_text.strip(), new_text.strip()
    content = full_path.read_text(encoding="utf-8")
    applied = apply_strategies(content, old, new)

    if applied is not None:
        strategy, updated = applied
        full_path.write_text(updated, encoding="utf-8")
        log.debug("dev_edit_applied", file=normalized, strategy=strategy, old=old, new=new)
        return EditResult(file_path=normalized, strategy=strategy)

    if search_in_multiple_files:
        normalized_old = normalize_text(old)
        for candidate in _source_files(root):
            text = candidate.read_text(encoding="utf-8")
            if old not in text and normalized_old not in normalize_text(text):
                continue
            applied = apply_strategies(text, old, new)
            if applied is None:
                continue
            strategy, updated = applied
            candidate.write_text(updated, encoding="utf-8")
            relative = candidate.relative_to(root).as_posix()
            log.debug("dev_edit_applied", file=relative, strategy=f"multi_file:{strategy}")
            return EditResult(
                file_path=relative,
                strategy=f"multi_file:{strategy}",
                message="File updated successfully (found in alternate file)",
            )

    raise DevEditError(404, "Text not found in file", {
        "searched": old_text,
        "file_path": normalized,
        "hint": "Try enabling multi-file search or check for text formatting differences",
    })


def find_text(text: str | None, *, root: Path | None = None) -> list[dict[str, Any]]:
    """Literal match counts per source file in the search directories."""
    if not text:
        raise DevEditError(400, "Missing required fields")

    root = (root or _root()).resolve()
    results = []
    for path in _source_files(root):
        matches = path.read_text(encoding="utf-8").count(text)
        if matches:
            results.append({"file": path.relative_to(root).as_posix(), "matches": matches})
    return results
