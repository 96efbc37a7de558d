import pytest

from chromalex.lexer import Config, RegexLexer
from chromalex.mutators import Rule
from chromalex.registry import LexerRegistry
from chromalex.tokentype import TokenType


def _lexer(**kwargs):
    return RegexLexer(
        Config(**kwargs), lambda: {"root": [Rule(r".", TokenType.Text)]}
    )


class _StubLexer:
    def __init__(self, config):
        self._config = config
        self.registry = None

    def config(self):
        return self._config

    def set_registry(self, registry):
        self.registry = registry
        return self


@pytest.fixture
def registry():
    reg = LexerRegistry()
    reg.register(
        _lexer(
            name="Zig",
            aliases=["zig", "ziglang"],
            filenames=["*.zig"],
            mime_types=["text/x-zig"],
        )
    )
    reg.register(
        _lexer(
            name="Makefile",
            aliases=["make", "mf"],
            filenames=["*.mk", "Makefile"],
            mime_types=["text/x-makefile"],
        )
    )
    reg.register(_lexer(name="Plain", filenames=["*.txt"], alias_filenames=["*.log"]))
    return reg


def test_register_sets_registry(registry):
    lexer = registry.get("Zig")
    assert lexer.registry is registry


def test_get_by_name_alias_and_case(registry):
    zig = registry.get("Zig")
    assert zig.config().name == "Zig"
    assert registry.get("ziglang") is zig
    assert registry.get("ZIG") is zig
    assert registry.get("MAKE") is registry.get("Makefile")


def test_get_by_extension_and_filename(registry):
    assert registry.get("zig") is registry.get("Zig")
    assert registry.get("mk") is registry.get("Makefile")
    assert registry.get("nothing-here") is None


def test_names_sorted(registry):
    assert registry.names(False) == ["Makefile", "Plain", "Zig"]
    assert registry.names(True) == sorted(
        ["Zig", "zig", "ziglang", "Makefile", "make", "mf", "Plain"]
    )


def test_aliases(registry):
    assert registry.aliases(True) == sorted(["zig", "ziglang", "make", "mf"])
    assert registry.aliases(False) == sorted(["zig", "ziglang", "make", "mf", "Plain"])


def test_match_uses_basename_and_backup_suffixes(registry):
    zig = registry.get("Zig")
    assert registry.match("/src/project/main.zig") is zig
    assert registry.match("main.zig.bak") is zig
    assert registry.match("main.zig~") is zig
    assert registry.match("Makefile.in") is registry.get("Makefile")
    assert registry.match("main.rs") is None


def test_match_falls_back_to_alias_filenames(registry):
    assert registry.match("server.log") is registry.get("Plain")


def test_match_prefers_higher_priority():
    reg = LexerRegistry()
    low = reg.register(_lexer(name="TypoScript", filenames=["*.ts"], priority=0.1))
    high = reg.register(_lexer(name="TypeScript", filenames=["*.ts"]))
    assert reg.match("app.ts") is high
    assert reg.match("app.ts") is not low


def test_match_mime_type(registry):
    assert registry.match_mime_type("text/x-makefile") is registry.get("Makefile")
    assert registry.match_mime_type("application/unknown") is None


def test_analyse_picks_highest_weight(registry):
    registry.get("Zig").set_analyser(lambda text: 0.3 if "const" in text else 0.0)
    registry.get("Makefile").set_analyser(lambda text: 0.8 if ".PHONY" in text else 0.0)
    assert registry.analyse(".PHONY: all\nconst") is registry.get("Makefile")
    assert registry.analyse("const x = 1;") is registry.get("Zig")
    assert registry.analyse("nothing") is None


def test_register_replaces_same_name(registry):
    replacement = _lexer(name="Zig", aliases=["zig"], filenames=["*.zig"])
    registry.register(replacement)
    assert registry.names(False) == ["Makefile", "Plain", "Zig"]
    assert registry.get("Zig") is replacement
    assert registry.match("x.zig") is replacement


def test_malformed_glob_raises():
    reg = LexerRegistry()
    reg.register(_StubLexer(Config(name="Broken", filenames=["[abc"])))
    with pytest.raises(ValueError):
        reg.match("anything")


def test_character_class_globs():
    reg = LexerRegistry()
    lexer = reg.register(_StubLexer(Config(name="Cls", filenames=["*.[ch]", "x[^0-9]"])))
    assert reg.match("main.c") is lexer
    assert reg.match("main.h") is lexer
    assert reg.match("xa") is lexer
    assert reg.match("x1") is None