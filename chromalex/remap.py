"""Lexers that rewrite the tokens produced by another lexer."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional

from .tokentype import Token, TokenType


@dataclass(frozen=True)
class TypeMap:
    """Map tokens of ``from_type`` to ``to_type``.

    With ``words`` only tokens with one of those values are remapped;
    without, every token of ``from_type`` is.
    """

    from_type: TokenType
    to_type: TokenType
    words: tuple = field(default_factory=tuple)


class RemappingLexer:
    """Wraps a lexer, replacing each token with zero or more tokens."""

    def __init__(self, lexer: Any, mapper: Callable[[Token], Iterable[Token]]):
        self.lexer = lexer
        self.mapper = mapper

    def config(self) -> Any:
        """The wrapped lexer's configuration."""
        return self.lexer.config()

    def analyse_text(self, text: str) -> float:
        """The wrapped lexer's score for ``text``."""
        return self.lexer.analyse_text(text)

    def set_analyser(self, analyser: Callable[[str], float]) -> RemappingLexer:
        """Set the analyser on the wrapped lexer."""
        self.lexer.set_analyser(analyser)
        return self

    def set_registry(self, registry: Any) -> RemappingLexer:
        """Set the registry on the wrapped lexer."""
        self.lexer.set_registry(registry)
        return self

    def tokenise(self, options: Optional[Any], text: str) -> Iterator[Token]:
        """Tokenise with the wrapped lexer and yield the remapped tokens."""
        tokens = self.lexer.tokenise(options, text)
        return self._remap(tokens)

    def _remap(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield from self.mapper(token)


def type_remapping_lexer(lexer: Any, mapping: Iterable[TypeMap]) -> RemappingLexer:
    """Wrap ``lexer`` so token types are remapped according to ``mapping``."""
    table: dict[TokenType, dict[str, TokenType]] = {}
    for entry in mapping:
        by_word = table.setdefault(entry.from_type, {})
        if entry.words:
            for word in entry.words:
                by_word[word] = entry.to_type
        else:
            by_word[""] = entry.to_type

    def mapper(token: Token) -> list[Token]:
        by_word = table.get(token.type)
        if by_word is not None:
            target = by_word.get(token.value, by_word.get(""))
            if target is not None:
                token = dataclasses.replace(token, type=target)
        return [token]

    return RemappingLexer(lexer, mapper)