"""Mutators that change lexer state as rules match."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, MutableMapping


@dataclass
class Rule:
    """A pattern, the emitter for its match and an optional mutator."""

    pattern: str = ""
    type: Any = None
    mutator: Any = None


@dataclass(frozen=True)
class MultiMutator:
    """Applies a sequence of mutators in order."""

    mutators: tuple = field(default_factory=tuple)

    def kind(self) -> str:
        return "mutators"

    def mutate(self, state: Any) -> None:
        for mutator in self.mutators:
            mutator.mutate(state)


@dataclass(frozen=True)
class IncludeMutator:
    """Splices the rules of another state in place of this rule."""

    state: str

    def kind(self) -> str:
        return "include"

    def mutate(self, state: Any) -> None:
        raise RuntimeError(f"should never reach here include({self.state!r})")

    def mutate_lexer(
        self, rules: MutableMapping[str, list], state: str, rule: int
    ) -> None:
        """Replace rule ``rule`` of ``state`` with the included state's rules."""
        if self.state not in rules:
            raise ValueError(f"invalid include state {self.state!r}")
        included = list(rules[self.state])
        current = rules[state]
        rules[state] = current[:rule] + included + current[rule + 1:]


@dataclass(frozen=True)
class CombinedMutator:
    """Builds an anonymous state from several states and pushes it."""

    states: tuple = field(default_factory=tuple)

    def kind(self) -> str:
        return "combined"

    def mutate(self, state: Any) -> None:
        raise RuntimeError(f"should never reach here combined({list(self.states)})")

    def mutate_lexer(
        self, rules: MutableMapping[str, list], state: str, rule: int
    ) -> None:
        """Create the combined state if needed and make the rule push it."""
        name = "__combined_" + "__".join(self.states)
        if name not in rules:
            combined: list = []
            for source in self.states:
                if source not in rules:
                    raise ValueError(f"invalid combine state {source!r}")
                combined.extend(rules[source])
            rules[name] = combined
        rules[state][rule].mutator = push(name)


@dataclass(frozen=True)
class PushMutator:
    """Pushes states onto the stack; with none, re-pushes the current state."""

    states: tuple = field(default_factory=tuple)

    def kind(self) -> str:
        return "push"

    def mutate(self, state: Any) -> None:
        if not self.states:
            state.stack.append(state.state)
            return
        for name in self.states:
            if name == "#pop":
                state.stack.pop()
            else:
                state.stack.append(name)


@dataclass(frozen=True)
class PopMutator:
    """Pops ``depth`` states from the stack."""

    depth: int = 1

    def kind(self) -> str:
        return "pop"

    def mutate(self, state: Any) -> None:
        if not state.stack:
            raise IndexError("nothing to pop")
        if self.depth > len(state.stack):
            raise IndexError(
                f"cannot pop {self.depth} states from a stack of {len(state.stack)}"
            )
        del state.stack[len(state.stack) - self.depth:]


def mutators(*args: Any) -> MultiMutator:
    """A mutator that applies ``args`` in order."""
    return MultiMutator(tuple(args))


def include(state: str) -> Rule:
    """A rule that includes the rules of ``state``."""
    return Rule(mutator=IncludeMutator(state))


def combined(*args: str) -> CombinedMutator:
    """A mutator that pushes a state combined from ``args``."""
    return CombinedMutator(tuple(args))


def push(*args: str) -> PushMutator:
    """A mutator that pushes ``args`` onto the stack."""
    return PushMutator(tuple(args))


def pop(depth: int) -> PopMutator:
    """A mutator that pops ``depth`` states."""
    return PopMutator(depth)


def default(*args: Any) -> Rule:
    """A pattern-less rule that applies the given mutators."""
    return Rule(mutator=mutators(*args))


def stringify(*args: Any) -> str:
    """The concatenated text of the given tokens."""
    return "".join(token.value for token in _iter_tokens(args))


def _iter_tokens(tokens: Iterable[Any]) -> Iterable[Any]:
    return tokens