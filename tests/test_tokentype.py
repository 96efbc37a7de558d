import pytest

from chromalex.tokentype import Token, TokenType


@pytest.mark.parametrize(
    "token_type, expected",
    [
        (TokenType.LiteralStringDouble, TokenType.LiteralString),
        (TokenType.LiteralString, TokenType.Literal),
        (TokenType.Literal, TokenType.EOFType),
        (TokenType.NameBuiltin, TokenType.Name),
        (TokenType.KeywordType, TokenType.Keyword),
        (TokenType.CommentPreprocFile, TokenType.CommentPreproc),
    ],
)
def test_parent(token_type, expected):
    assert token_type.parent() is expected


def test_parent_chain_reaches_eof():
    t = TokenType.NameVariableGlobal
    seen = []
    while t is not TokenType.EOFType:
        seen.append(t)
        t = t.parent()
    assert seen == [TokenType.NameVariableGlobal, TokenType.NameVariable, TokenType.Name]


def test_category_and_sub_category():
    assert TokenType.LiteralNumberHex.category() is TokenType.Literal
    assert TokenType.LiteralNumberHex.sub_category() is TokenType.LiteralNumber
    assert TokenType.CommentPreproc.category() is TokenType.Comment
    assert TokenType.Punctuation.sub_category() is TokenType.Punctuation


def test_meta_types_truncate_toward_zero():
    assert TokenType.LineHighlight.category() is TokenType.EOFType
    assert TokenType.LineNumbers.sub_category() is TokenType.EOFType
    assert TokenType.Background.parent() is TokenType.EOFType


def test_in_category():
    assert TokenType.NameFunction.in_category(TokenType.Name)
    assert TokenType.NameFunction.in_category(TokenType.NameBuiltin)
    assert not TokenType.NameFunction.in_category(TokenType.Keyword)


def test_in_sub_category():
    assert TokenType.LiteralStringEscape.in_sub_category(TokenType.LiteralString)
    assert not TokenType.LiteralStringEscape.in_sub_category(TokenType.LiteralNumber)
    assert not TokenType.LiteralStringEscape.in_sub_category(TokenType.Literal)


@pytest.mark.parametrize("member", list(TokenType))
def test_every_category_is_a_member(member):
    assert TokenType(member.category().value) is member.category()
    assert TokenType(member.sub_category().value) is member.sub_category()
    assert TokenType(member.parent().value) is member.parent()


def test_aliases_share_members():
    assert TokenType(8001) is TokenType.Whitespace
    assert TokenType(3100) is TokenType.String
    assert TokenType(3206) is TokenType.NumberOct
    assert TokenType["Whitespace"].name == "TextWhitespace"


def test_emit_yields_whole_match():
    tokens = list(TokenType.Keyword.emit(["hello", "he", "llo"], None))
    assert tokens == [Token(TokenType.Keyword, "hello")]


def test_emit_requires_groups():
    with pytest.raises(IndexError):
        list(TokenType.Name.emit([], None))


def test_token_equality_and_str():
    token = Token(TokenType.Operator, "->")
    assert token == Token(TokenType.Operator, "->")
    assert token != Token(TokenType.Punctuation, "->")
    assert str(token) == "->"


def test_token_type_str():
    assert str(TokenType(2200)) == "NameVariable"
    assert str(TokenType(-13)) == "None"
    assert TokenType(3207) is TokenType.LiteralNumberByte
    assert TokenType(-14) is TokenType.Ignore