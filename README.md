# chromalex

Regex-driven lexers for syntax highlighting. You describe a language as a
state machine of rules. Each rule has a pattern, the token type it emits, and
an optional change to the state stack. The lexer turns source text into a
stream of typed tokens.

## Installing

```
pip install chromalex
```

## Token types

`chromalex.tokentype.TokenType` is an `IntEnum` of token kinds, such as
`Keyword`, `Name`, `LiteralString`, `Comment` and `Text`, with short aliases
like `String`, `Number` and `Whitespace`. Values are grouped in ranges of 1000
for categories and 100 for sub-categories. `parent()`, `category()`,
`sub_category()`, `in_category()` and `in_sub_category()` expose this
hierarchy. `chromalex.tokentype.Token` is a frozen pair of a type and the text
that was matched.

`chromalex.tokennames` converts between token types and their names:

- `token_type_from_string("namevariable")` looks a type up by name. The lookup
  ignores case and raises `ValueError` for unknown names.
- `token_type_values()` and `token_type_strings()` list every type, ordered by
  value.
- `is_token_type(n)` reports whether `n` is a defined type.
- `token_type_name(n)` returns a type's name, or `TokenType(n)` if `n` is not
  a defined type.

`chromalex.classes.css_class(token_type)` returns the short CSS class name for
a type, for example `"k"` for `Keyword`. It raises `KeyError` for types that
have no standard class. `standard_types()` returns the whole mapping.

## Writing a lexer

```python
from chromalex.lexer import Config, RegexLexer, tokenise
from chromalex.mutators import Rule, push, pop
from chromalex.tokentype import TokenType

def rules():
    return {
        "root": [
            Rule(r"\s+", TokenType.TextWhitespace),
            Rule(r"^-", TokenType.Punctuation, push("directive")),
            Rule(r"->", TokenType.Operator),
        ],
        "directive": [
            Rule(r"module", TokenType.NameEntity, pop(1)),
        ],
    }

lexer = RegexLexer(Config(name="Example"), rules)
for token in tokenise(lexer, None, "-module ->"):
    print(token.type.name, repr(token.value))
```

The rules function is called the first time the lexer is used. Every pattern
is then compiled to match only at the current position. `Config` sets the
regex flags:

- multi-line is on unless `not_multiline` is set;
- `case_insensitive` turns on case-insensitive matching;
- `dot_all` lets `.` match newlines.

`RegexLexer.tokenise(options, text)` returns a `LexerState`, which you iterate
to get tokens. The module-level `tokenise` collects those tokens into a list.
`TokeniseOptions` has three fields:

- `state`: the state to start in. The default is `"root"`.
- `ensure_lf`: turn `\r\n` and lone `\r` into `\n`. The default is on.
- `nested`: when set, `Config(ensure_nl=True)` does not add a trailing
  newline.

Text that no rule matches comes out one character at a time as
`TokenType.Error` tokens. There is one exception: when an unmatched newline is
met outside the start state, the stack resets to the start state.

`LexerError` is raised in three cases:

- a filename glob in the config is malformed;
- the rules have no `"root"` state;
- a pattern fails to compile.

Helpers:

- `words(prefix, suffix, *words)` builds an alternation of escaped words,
  longest first.
- `clone_rules`, `rename_rules` and `merge_rules` copy and combine rule maps.
- `ensure_lf` normalises line endings.

### Mutators

All of these are in `chromalex.mutators`:

- `push(*states)` pushes states onto the stack. With no states it pushes the
  current state again. A state named `#pop` pops instead.
- `pop(depth)` pops `depth` states off the stack. It raises `IndexError` if
  the stack is too short.
- `include(state)` returns a rule that is replaced by another state's rules
  when the lexer compiles.
- `combined(*states)` builds a new state from several states and pushes it.
- `mutators(*items)` applies several mutators in order.
- `default(*items)` returns a rule with no pattern that applies several
  mutators in order.
- `stringify(*tokens)` joins the text of tokens.

## Registries and remapping

`chromalex.registry.LexerRegistry` keeps lexers. Registering a lexer with the
same name as an existing one replaces it. Lookups:

- `get` finds a lexer by name or alias, exact or lower-case. Failing that, it
  tries the name as a file extension or a file name.
- `match` uses filename globs. Primary globs are tried before alias globs, and
  a glob also matches names with common backup suffixes such as `.bak` or `~`.
- `match_mime_type` finds a lexer by MIME type.
- `analyse` returns the lexer whose analyser gives the highest score above
  zero.
- `names` and `aliases` list what is registered, sorted.

When several lexers match, the one with the highest `Config.priority` wins. A
priority of zero counts as 1.

`chromalex.remap.RemappingLexer` wraps a lexer and replaces each token with
the tokens a mapping function returns. `type_remapping_lexer` uses it to
change token types. Each `TypeMap` entry gives a source type, a target type
and an optional tuple of words the change applies to:

```python
from chromalex.remap import TypeMap, type_remapping_lexer
from chromalex.tokentype import TokenType

keywords = type_remapping_lexer(
    lexer, [TypeMap(TokenType.Name, TokenType.Keyword, ("if", "else"))]
)
```

`chromalex.zed.analyse_zed` scores how much a piece of text looks like a Zed
schema. Pass it to `RegexLexer.set_analyser` to use it.

## What this package does not do

chromalex produces token streams only. It does not include:

- definitions for any particular programming language;
- formatters that render tokens as HTML, terminal colours or other output;
- colour styles;
- a command-line tool.