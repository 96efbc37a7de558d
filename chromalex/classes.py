"""Short CSS class names for the standard token types."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .tokentype import TokenType

_T = TokenType

_STANDARD_TYPES: Mapping[TokenType, str] = MappingProxyType(
    {
        _T.Background: "bg",
        _T.PreWrapper: "chroma",
        _T.Line: "line",
        _T.LineNumbers: "ln",
        _T.LineNumbersTable: "lnt",
        _T.LineHighlight: "hl",
        _T.LineTable: "lntable",
        _T.LineTableTD: "lntd",
        _T.LineLink: "lnlinks",
        _T.CodeLine: "cl",
        _T.Text: "",
        _T.Whitespace: "w",
        _T.Error: "err",
        _T.Other: "x",
        _T.Keyword: "k",
        _T.KeywordConstant: "kc",
        _T.KeywordDeclaration: "kd",
        _T.KeywordNamespace: "kn",
        _T.KeywordPseudo: "kp",
        _T.KeywordReserved: "kr",
        _T.KeywordType: "kt",
        _T.Name: "n",
        _T.NameAttribute: "na",
        _T.NameBuiltin: "nb",
        _T.NameBuiltinPseudo: "bp",
        _T.NameClass: "nc",
        _T.NameConstant: "no",
        _T.NameDecorator: "nd",
        _T.NameEntity: "ni",
        _T.NameException: "ne",
        _T.NameFunction: "nf",
        _T.NameFunctionMagic: "fm",
        _T.NameProperty: "py",
        _T.NameLabel: "nl",
        _T.NameNamespace: "nn",
        _T.NameOther: "nx",
        _T.NameTag: "nt",
        _T.NameVariable: "nv",
        _T.NameVariableClass: "vc",
        _T.NameVariableGlobal: "vg",
        _T.NameVariableInstance: "vi",
        _T.NameVariableMagic: "vm",
        _T.Literal: "l",
        _T.LiteralDate: "ld",
        _T.String: "s",
        _T.StringAffix: "sa",
        _T.StringBacktick: "sb",
        _T.StringChar: "sc",
        _T.StringDelimiter: "dl",
        _T.StringDoc: "sd",
        _T.StringDouble: "s2",
        _T.StringEscape: "se",
        _T.StringHeredoc: "sh",
        _T.StringInterpol: "si",
        _T.StringOther: "sx",
        _T.StringRegex: "sr",
        _T.StringSingle: "s1",
        _T.StringSymbol: "ss",
        _T.Number: "m",
        _T.NumberBin: "mb",
        _T.NumberFloat: "mf",
        _T.NumberHex: "mh",
        _T.NumberInteger: "mi",
        _T.NumberIntegerLong: "il",
        _T.NumberOct: "mo",
        _T.Operator: "o",
        _T.OperatorWord: "ow",
        _T.Punctuation: "p",
        _T.Comment: "c",
        _T.CommentHashbang: "ch",
        _T.CommentMultiline: "cm",
        _T.CommentPreproc: "cp",
        _T.CommentPreprocFile: "cpf",
        _T.CommentSingle: "c1",
        _T.CommentSpecial: "cs",
        _T.Generic: "g",
        _T.GenericDeleted: "gd",
        _T.GenericEmph: "ge",
        _T.GenericError: "gr",
        _T.GenericHeading: "gh",
        _T.GenericInserted: "gi",
        _T.GenericOutput: "go",
        _T.GenericPrompt: "gp",
        _T.GenericStrong: "gs",
        _T.GenericSubheading: "gu",
        _T.GenericTraceback: "gt",
        _T.GenericUnderline: "gl",
    }
)

del _T


def css_class(token_type: int) -> str:
    """The standard CSS class name of ``token_type``.

    Raises KeyError for token types that have no standard class.
    """
    try:
        return _STANDARD_TYPES[TokenType(token_type)]
    except (KeyError, ValueError):
        raise KeyError(f"no standard class for token type {token_type!r}") from None


def standard_types() -> dict[TokenType, str]:
    """A fresh mapping of every standard token type to its CSS class."""
    return dict(_STANDARD_TYPES)