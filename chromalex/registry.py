"""A registry of lexers, searchable by name, alias, filename and MIME type."""

from __future__ import annotations

import functools
import re
from typing import Any, Optional

_IGNORED_SUFFIXES: tuple[str, ...] = (
    # Editor backups
    "~", ".bak", ".old", ".orig",
    # Debian and derivatives apt/dpkg/ucf backups
    ".dpkg-dist", ".dpkg-old", ".ucf-dist", ".ucf-new", ".ucf-old",
    # Red Hat and derivatives rpm backups
    ".rpmnew", ".rpmorig", ".rpmsave",
    # Build system input/template files
    ".in",
)


def _class_char(glob: str, pos: int) -> tuple[str, int]:
    """Read one (possibly escaped) character of a bracket expression."""
    if pos >= len(glob) or glob[pos] in "-]":
        raise ValueError(f"syntax error in pattern {glob!r}")
    if glob[pos] == "\\":
        pos += 1
        if pos >= len(glob):
            raise ValueError(f"syntax error in pattern {glob!r}")
    return glob[pos], pos + 1


@functools.lru_cache(maxsize=None)
def _compile_glob(glob: str) -> "re.Pattern[str]":
    """Translate a shell glob with ``/``-separated semantics into a regex."""
    out: list[str] = []
    pos = 0
    size = len(glob)
    while pos < size:
        char = glob[pos]
        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "\\":
            pos += 1
            if pos >= size:
                raise ValueError(f"syntax error in pattern {glob!r}")
            out.append(re.escape(glob[pos]))
        elif char == "[":
            pos += 1
            negate = pos < size and glob[pos] == "^"
            if negate:
                pos += 1
            parts: list[str] = []
            while True:
                if pos >= size:
                    raise ValueError(f"syntax error in pattern {glob!r}")
                if glob[pos] == "]" and parts:
                    break
                low, pos = _class_char(glob, pos)
                if pos < size and glob[pos] == "-":
                    high, pos = _class_char(glob, pos + 1)
                    parts.append(f"{re.escape(low)}-{re.escape(high)}" if low <= high else "")
                    if low > high:
                        parts[-1] = "(?!)"
                else:
                    parts.append(re.escape(low))
            ranges = [part for part in parts if part != "(?!)"]
            if ranges:
                out.append("[" + ("^" if negate else "") + "".join(ranges) + "]")
            else:
                out.append("." if negate else "(?!)")
        else:
            out.append(re.escape(char))
        pos += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def _glob_match(glob: str, name: str) -> bool:
    return _compile_glob(glob).match(name) is not None


def _base(filename: str) -> str:
    """The last element of a ``/``-separated path."""
    if not filename:
        return "."
    stripped = filename.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _prioritised(lexers: list) -> list:
    """Lexers ordered by descending priority; an unset priority counts as 1."""
    return sorted(lexers, key=lambda lexer: -(lexer.config().priority or 1.0))


def _matches(glob: str, filename: str) -> bool:
    if _glob_match(glob, filename):
        return True
    return any(_glob_match(glob + suffix, filename) for suffix in _IGNORED_SUFFIXES)


class LexerRegistry:
    """A collection of lexers with lookups by name, alias, file and content."""

    def __init__(self) -> None:
        self.lexers: list = []
        self._by_name: dict[str, Any] = {}
        self._by_alias: dict[str, Any] = {}

    def names(self, with_aliases: bool) -> list[str]:
        """Sorted names of all lexers, optionally with their aliases."""
        out: list[str] = []
        for lexer in self.lexers:
            config = lexer.config()
            out.append(config.name)
            if with_aliases:
                out.extend(config.aliases)
        return sorted(out)

    def aliases(self, skip_without_aliases: bool) -> list[str]:
        """Sorted aliases of all lexers; lexers without any contribute their name
        unless ``skip_without_aliases`` is set."""
        out: list[str] = []
        for lexer in self.lexers:
            config = lexer.config()
            if not config.aliases:
                if skip_without_aliases:
                    continue
                out.append(config.name)
            out.extend(config.aliases)
        return sorted(out)

    def get(self, name: str) -> Optional[Any]:
        """A lexer by name, alias or file extension, or None."""
        for table, key in (
            (self._by_name, name),
            (self._by_alias, name),
            (self._by_name, name.lower()),
            (self._by_alias, name.lower()),
        ):
            lexer = table.get(key)
            if lexer is not None:
                return lexer
        candidates = [
            lexer
            for lexer in (self.match("filename." + name), self.match(name))
            if lexer is not None
        ]
        if not candidates:
            return None
        return _prioritised(candidates)[0]

    def match_mime_type(self, mime_type: str) -> Optional[Any]:
        """The highest-priority lexer declaring ``mime_type``, or None."""
        matched = [
            lexer
            for lexer in self.lexers
            for declared in lexer.config().mime_types
            if declared == mime_type
        ]
        return _prioritised(matched)[0] if matched else None

    def match(self, filename: str) -> Optional[Any]:
        """The best lexer whose filename globs match ``filename``, or None.

        Primary filename globs are tried first, then alias globs. A glob
        also matches when one of the usual backup suffixes is appended.
        Raises ValueError if a lexer carries a malformed glob.
        """
        filename = _base(filename)
        for attribute in ("filenames", "alias_filenames"):
            matched = [
                lexer
                for lexer in self.lexers
                for glob in getattr(lexer.config(), attribute)
                if _matches(glob, filename)
            ]
            if matched:
                return _prioritised(matched)[0]
        return None

    def analyse(self, text: str) -> Optional[Any]:
        """The lexer whose analyser scores ``text`` highest above zero, or None."""
        picked = None
        highest = 0.0
        for lexer in self.lexers:
            analyse_text = getattr(lexer, "analyse_text", None)
            if analyse_text is None:
                continue
            weight = analyse_text(text)
            if weight > highest:
                picked = lexer
                highest = weight
        return picked

    def register(self, lexer: Any) -> Any:
        """Add ``lexer``, replacing any registered lexer of the same name."""
        lexer.set_registry(self)
        config = lexer.config()
        self._by_name[config.name] = lexer
        self._by_name[config.name.lower()] = lexer
        for alias in config.aliases:
            self._by_alias[alias] = lexer
            self._by_alias[alias.lower()] = lexer
        for index, existing in enumerate(self.lexers):
            if existing is not None and existing.config().name == config.name:
                self.lexers[index] = lexer
                break
        else:
            self.lexers.append(lexer)
        return lexer