import pytest

from chromalex.lexer import Config, RegexLexer
from chromalex.mutators import Rule
from chromalex.registry import LexerRegistry
from chromalex.tokentype import TokenType
from chromalex.zed import analyse_zed

SCHEMA = """definition user {}

definition document {
    relation viewer: user
    permission view = viewer
}
"""


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (SCHEMA, 0.9),
        ("definition user {}", 0.5),
        ("relation viewer: user", 0.5),
        ("permission view = viewer", 0.25),
        ("nothing to see", 0.0),
        ("definitionuser", 0.0),
    ],
)
def test_analyse_zed(text, expected):
    assert analyse_zed(text) == expected


def test_definition_and_permission_without_relation():
    assert analyse_zed("definition a {}\npermission b = c") == analyse_zed("definition a")


def test_registry_analysis_picks_zed():
    registry = LexerRegistry()
    zed = registry.register(
        RegexLexer(Config(name="Zed"), lambda: {"root": [Rule(r".", TokenType.Text)]})
    )
    zed.set_analyser(analyse_zed)
    assert registry.analyse(SCHEMA) is zed
    assert registry.analyse("plain text") is None