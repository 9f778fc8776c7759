"""Turns source text into a list of tokens ending with an end-of-file token."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """The kinds of token the language knows."""

    BEGINNING = auto()
    STRING = auto()
    INT = auto()
    KEYWORD = auto()
    SEPARATOR = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    EOFILE = auto()


@dataclass
class Token:
    """One lexical token: its kind and its text."""

    type: TokenType
    value: str


class LexerError(ValueError):
    """Raised when the input holds a character the language does not allow."""

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Unknown Character {char!r} at position {position}")
        self.char = char
        self.position = position


KEYWORDS = frozenset({"exit", "int"})
SEPARATORS = frozenset(";()")
OPERATORS = frozenset("+-/*%=")
EOF_VALUE = "Eofile"

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_SKIPPED = frozenset(" \n")

_TYPE_TEXT = {
    TokenType.INT: "Type: INT",
    TokenType.KEYWORD: "Type: KEYWORD",
    TokenType.SEPARATOR: "Type: SEPARATOR",
    TokenType.IDENTIFIER: "Type : IDENTIFIER",
    TokenType.OPERATOR: "Type: OPERATOR",
    TokenType.EOFILE: "Type: EOFILE",
    TokenType.BEGINNING: "Type: BEGINNING",
}


def _scan_run(text: str, start: int, allowed: frozenset[str]) -> int:
    end = start
    while end < len(text) and text[end] in allowed:
        end += 1
    return end


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens; the last token is always of type EOFILE.

    Numbers are normalised to their decimal value, runs of letters become
    keywords or identifiers, and spaces and newlines are skipped.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char in _DIGITS:
            end = _scan_run(text, pos, _DIGITS)
            tokens.append(Token(TokenType.INT, str(int(text[pos:end]))))
            pos = end
        elif char in _LETTERS:
            end = _scan_run(text, pos, _LETTERS)
            word = text[pos:end]
            kind = TokenType.KEYWORD if word in KEYWORDS else TokenType.IDENTIFIER
            tokens.append(Token(kind, word))
            pos = end
        elif char in SEPARATORS:
            tokens.append(Token(TokenType.SEPARATOR, char))
            pos += 1
        elif char in OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, char))
            pos += 1
        elif char in _SKIPPED:
            pos += 1
        else:
            raise LexerError(char, pos)
    tokens.append(Token(TokenType.EOFILE, EOF_VALUE))
    return tokens


def format_token(token: Token) -> str:
    """Describe a token in the compiler's diagnostic format."""
    type_text = _TYPE_TEXT.get(token.type, "Undefined type")
    return f"\nPrinting token: value: '{token.value}'  ,{type_text}\n"