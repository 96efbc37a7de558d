"""Content analysis for Zed schema files."""

from __future__ import annotations


def analyse_zed(text: str) -> float:
    """Score how likely ``text`` is a Zed schema, between 0.0 and 1.0."""
    has_definition = "definition " in text
    has_relation = "relation " in text
    has_permission = "permission " in text
    if has_definition and has_relation and has_permission:
        return 0.9
    if has_definition:
        return 0.5
    if has_relation:
        return 0.5
    if has_permission:
        return 0.25
    return 0.0