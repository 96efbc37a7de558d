"""Regular-expression driven lexers built from state machines of rules."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Optional

import regex

from .mutators import Rule
from .tokentype import Token, TokenType

_MATCH_TIMEOUT = 0.25

Rules = dict


class LexerError(Exception):
    """Raised when a lexer is misconfigured or reaches an impossible state."""


@dataclass
class Config:
    """Static description of a lexer."""

    name: str = ""
    aliases: list = field(default_factory=list)
    filenames: list = field(default_factory=list)
    alias_filenames: list = field(default_factory=list)
    mime_types: list = field(default_factory=list)
    case_insensitive: bool = False
    dot_all: bool = False
    not_multiline: bool = False
    ensure_nl: bool = False
    priority: float = 0.0


@dataclass
class TokeniseOptions:
    """Options controlling a single tokenisation run."""

    state: str = "root"
    ensure_lf: bool = True
    nested: bool = False


@dataclass
class CompiledRule(Rule):
    """A rule together with its compiled regular expression."""

    regexp: Any = field(default=None, compare=False, repr=False)
    flags: int = field(default=0, compare=False, repr=False)


def words(prefix: str, suffix: str, *args: str) -> str:
    """A pattern matching any of the literal words, longest first."""
    ordered = sorted(args, key=len, reverse=True)
    return prefix + "(" + "|".join(regex.escape(word) for word in ordered) + ")" + suffix


def tokenise(lexer: Any, options: Optional[TokeniseOptions], text: str) -> list:
    """Tokenise ``text`` with ``lexer`` and return the tokens as a list."""
    return list(lexer.tokenise(options, text))


def ensure_lf(text: str) -> str:
    """Replace ``\\r\\n`` and lone ``\\r`` with ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def clone_rules(rules: Mapping[str, list]) -> dict:
    """A copy of ``rules`` whose per-state lists are independent."""
    return {state: list(state_rules) for state, state_rules in rules.items()}


def rename_rules(rules: Mapping[str, list], old: str, new: str) -> dict:
    """A copy of ``rules`` with state ``old`` renamed to ``new``."""
    out = clone_rules(rules)
    out[new] = out.pop(old, None)
    return out


def merge_rules(rules: Mapping[str, list], other: Mapping[str, list]) -> dict:
    """A copy of ``rules`` with the states of ``other`` laid over it."""
    out = clone_rules(rules)
    out.update(clone_rules(other))
    return out


def _glob_char(glob: str, pos: int) -> int:
    if pos >= len(glob) or glob[pos] in "-]":
        raise ValueError("syntax error in pattern")
    if glob[pos] == "\\":
        pos += 1
        if pos >= len(glob):
            raise ValueError("syntax error in pattern")
    return pos + 1


def _check_glob(glob: str) -> None:
    """Reject malformed shell globs (unbalanced classes, dangling escapes)."""
    pos = 0
    size = len(glob)
    while pos < size:
        char = glob[pos]
        if char == "\\":
            if pos + 1 >= size:
                raise ValueError("syntax error in pattern")
            pos += 2
            continue
        if char == "[":
            pos += 1
            if pos < size and glob[pos] == "^":
                pos += 1
            ranges = 0
            while True:
                if pos >= size:
                    raise ValueError("syntax error in pattern")
                if glob[pos] == "]" and ranges > 0:
                    break
                pos = _glob_char(glob, pos)
                if pos < size and glob[pos] == "-":
                    pos = _glob_char(glob, pos + 1)
                ranges += 1
        pos += 1


def _match_rules(text: str, pos: int, rules: list):
    for index, rule in enumerate(rules):
        try:
            match = rule.regexp.match(text, pos, timeout=_MATCH_TIMEOUT)
        except TimeoutError:
            continue
        if match is None or match.start() != pos:
            continue
        names = {number: name for name, number in rule.regexp.groupindex.items()}
        groups = []
        named_groups = {}
        for number in range(len(match.groups()) + 1):
            value = match.group(number) or ""
            groups.append(value)
            named_groups[names.get(number, str(number))] = value
        return index, rule, groups, named_groups
    return None


@dataclass
class LexerState:
    """The state of one tokenisation run; iterating it yields tokens."""

    lexer: Any
    registry: Any
    text: str
    rules: dict
    stack: list
    options: TokeniseOptions
    newline_added: bool = False
    pos: int = 0
    state: str = ""
    rule: int = 0
    groups: list = field(default_factory=list)
    named_groups: dict = field(default_factory=dict)
    mutator_context: dict = field(default_factory=dict)
    _iterators: list = field(default_factory=list, init=False, repr=False)

    def set(self, key: Any, value: Any) -> None:
        """Store a value in the mutator context."""
        self.mutator_context[key] = value

    def get(self, key: Any) -> Any:
        """Fetch a value from the mutator context, or None."""
        return self.mutator_context.get(key)

    def __iter__(self) -> Iterator[Token]:
        return self

    def _drain(self) -> Optional[Token]:
        while self._iterators:
            try:
                token = next(self._iterators[-1])
            except StopIteration:
                self._iterators.pop()
                continue
            if token.type == TokenType.Ignore:
                continue
            return token
        return None

    def __next__(self) -> Token:
        end = len(self.text) - (1 if self.newline_added else 0)
        while self.pos < end and self.stack:
            token = self._drain()
            if token is not None:
                return token
            self.state = self.stack[-1]
            if getattr(self.lexer, "trace", False):
                print(
                    f"{self.state}: pos={self.pos}, text={self.text[self.pos:]!r}",
                    file=sys.stderr,
                )
            state_rules = self.rules.get(self.state)
            if state_rules is None:
                raise LexerError(f"unknown state {self.state}")
            found = _match_rules(self.text, self.pos, state_rules)
            if found is None:
                # A newline that nothing matches resets to the initial state,
                # so an unterminated construct does not poison the rest.
                if self.text[self.pos] == "\n" and self.state != self.options.state:
                    self.stack = [self.options.state]
                    continue
                self.pos += 1
                return Token(TokenType.Error, self.text[self.pos - 1])
            self.rule, rule, self.groups, self.named_groups = found
            self.pos += len(self.groups[0])
            if rule.mutator is not None:
                rule.mutator.mutate(self)
            if rule.type is not None:
                self._iterators.append(iter(rule.type.emit(self.groups, self)))
        token = self._drain()
        if token is not None:
            return token
        if self.pos != len(self.text) and not self.stack:
            value = self.text[self.pos:]
            self.pos = len(self.text)
            return Token(TokenType.Error, value)
        raise StopIteration


class RegexLexer:
    """A lexer driven by a map of states to regular-expression rules."""

    def __init__(self, config: Optional[Config], rules_func: Callable[[], dict]):
        config = config if config is not None else Config()
        for glob in [*config.filenames, *config.alias_filenames]:
            try:
                _check_glob(glob)
            except ValueError as exc:
                raise LexerError(
                    f"{config.name}: {glob!r} is not a valid glob: {exc}"
                ) from exc
        self._config = config
        self._rules_func = rules_func
        self._analyser: Optional[Callable[[str], float]] = None
        self._lock = threading.Lock()
        self._raw_rules: Optional[dict] = None
        self._compiled: Optional[dict] = None
        self.registry: Any = None
        self.trace = False

    def __str__(self) -> str:
        return self._config.name

    def config(self) -> Config:
        """The lexer's configuration."""
        return self._config

    def set_config(self, config: Config) -> RegexLexer:
        """Replace the configuration."""
        self._config = config
        return self

    def rules(self) -> dict:
        """The uncompiled rules of the lexer."""
        self._need_rules()
        return self._raw_rules

    def set_registry(self, registry: Any) -> RegexLexer:
        """Set the registry used to look up other lexers."""
        self.registry = registry
        return self

    def set_analyser(self, analyser: Callable[[str], float]) -> RegexLexer:
        """Set the function that scores how well text suits this lexer."""
        self._analyser = analyser
        return self

    def analyse_text(self, text: str) -> float:
        """Score between 0.0 and 1.0 of how likely ``text`` suits this lexer."""
        if self._analyser is not None:
            return self._analyser(text)
        return 0.0

    def _flags(self) -> int:
        flags = 0
        if not self._config.not_multiline:
            flags |= regex.MULTILINE
        if self._config.case_insensitive:
            flags |= regex.IGNORECASE
        if self._config.dot_all:
            flags |= regex.DOTALL
        return flags

    def _need_rules(self) -> dict:
        with self._lock:
            if self._compiled is not None:
                return self._compiled
            raw = self._rules_func()
            if "root" not in raw:
                raise LexerError('no "root" state')
            flags = self._flags()
            compiled = {
                state: [
                    CompiledRule(rule.pattern, rule.type, rule.mutator, flags=flags)
                    for rule in state_rules
                ]
                for state, state_rules in raw.items()
            }
            for state, state_rules in compiled.items():
                for index, rule in enumerate(state_rules):
                    try:
                        rule.regexp = regex.compile(
                            r"\G(?:" + rule.pattern + ")", rule.flags
                        )
                    except regex.error as exc:
                        raise LexerError(
                            f"failed to compile rule {state}.{index}: {exc}"
                        ) from exc
            _apply_lexer_mutators(compiled)
            self._raw_rules = raw
            self._compiled = compiled
            return compiled

    def tokenise(self, options: Optional[TokeniseOptions], text: str) -> LexerState:
        """Start tokenising ``text``; the result is an iterator of tokens."""
        rules = self._need_rules()
        if options is None:
            options = TokeniseOptions()
        if options.ensure_lf:
            text = ensure_lf(text)
        newline_added = False
        if not options.nested and self._config.ensure_nl and not text.endswith("\n"):
            text += "\n"
            newline_added = True
        return LexerState(
            lexer=self,
            registry=self.registry,
            text=text,
            rules=rules,
            stack=[options.state],
            options=options,
            newline_added=newline_added,
        )


def _apply_lexer_mutators(rules: dict) -> None:
    """Run compile-time mutators until none are left in any state."""
    while True:
        for state in list(rules):
            found = next(
                (
                    (index, rule)
                    for index, rule in enumerate(rules[state])
                    if hasattr(rule.mutator, "mutate_lexer")
                ),
                None,
            )
            if found is not None:
                index, rule = found
                rule.mutator.mutate_lexer(rules, state, index)
                break
        else:
            return