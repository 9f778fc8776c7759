import pytest

from cobrac.lexer import LexerError, Token, TokenType, format_token, tokenize


def test_exit_statement_types():
    tokens = tokenize("exit(5);")
    assert [t.type for t in tokens] == [
        TokenType.KEYWORD,
        TokenType.SEPARATOR,
        TokenType.INT,
        TokenType.SEPARATOR,
        TokenType.SEPARATOR,
        TokenType.EOFILE,
    ]


def test_values_round_trip_without_spaces():
    text = "int x = 3 + 4 * (2 - 1) % 5 / 2;"
    tokens = tokenize(text)
    assert "".join(t.value for t in tokens[:-1]) == text.replace(" ", "")


def test_last_token_is_end_of_file():
    tokens = tokenize("exit(1);")
    assert tokens[-1] == Token(TokenType.EOFILE, "Eofile")


def test_empty_input_gives_only_end_token():
    assert tokenize("") == [Token(TokenType.EOFILE, "Eofile")]


def test_keywords_and_identifiers():
    tokens = tokenize("int value exit")
    assert tokens[:3] == [
        Token(TokenType.KEYWORD, "int"),
        Token(TokenType.IDENTIFIER, "value"),
        Token(TokenType.KEYWORD, "exit"),
    ]


def test_letters_and_digits_split_into_separate_tokens():
    tokens = tokenize("ab12")
    assert tokens[:2] == [
        Token(TokenType.IDENTIFIER, "ab"),
        Token(TokenType.INT, "12"),
    ]


def test_number_is_normalised():
    assert tokenize("007")[0] == Token(TokenType.INT, "7")


@pytest.mark.parametrize("op", list("+-/*%="))
def test_operators(op):
    assert tokenize(op)[0] == Token(TokenType.OPERATOR, op)


@pytest.mark.parametrize("sep", list(";()"))
def test_separators(sep):
    assert tokenize(sep)[0] == Token(TokenType.SEPARATOR, sep)


def test_newlines_and_spaces_are_skipped():
    assert tokenize("exit\n(  2 )\n;") == tokenize("exit(2);")


@pytest.mark.parametrize("text", ["exit$", "\t", "int x = 3.5;"])
def test_unknown_character_raises(text):
    with pytest.raises(LexerError):
        tokenize(text)


def test_lexer_error_reports_character_and_position():
    with pytest.raises(LexerError) as info:
        tokenize("ab#")
    assert info.value.char == "#"
    assert info.value.position == 2


def test_format_token_int():
    text = format_token(Token(TokenType.INT, "5"))
    assert text == "\nPrinting token: value: '5'  ,Type: INT\n"


def test_format_token_identifier_spelling():
    text = format_token(Token(TokenType.IDENTIFIER, "x"))
    assert text.endswith("Type : IDENTIFIER\n")


def test_format_token_undefined_type():
    text = format_token(Token(TokenType.STRING, "s"))
    assert text.endswith("Undefined type\n")


def test_format_token_end_of_file():
    text = format_token(tokenize("")[0])
    assert "'Eofile'" in text
    assert text.endswith("Type: EOFILE\n")