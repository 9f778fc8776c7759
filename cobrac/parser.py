"""Builds a syntax tree from tokens, including prefix-ordered expression trees."""

from __future__ import annotations

import re
from dataclasses import dataclass

from cobrac.lexer import Token, TokenType
from cobrac.stack import Stack


class ParseError(ValueError):
    """Raised when the token stream does not form a valid program."""


@dataclass
class Node:
    """A node of the syntax tree."""

    value: str
    type: TokenType
    left: Node | None = None
    right: Node | None = None


_PRECEDENCE = {"^": 3, "*": 2, "/": 2, "%": 2, "+": 1, "-": 1}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _is_operand(text: str) -> bool:
    head = text[:1]
    return (head.isascii() and head.isalnum()) or _atoi(text) < 0


def _at(tokens: list[Token], index: int) -> Token:
    if not 0 <= index < len(tokens):
        raise ParseError("unexpected end of input")
    return tokens[index]


def op_prec(op: str) -> int:
    """Return the binding strength of an operator character, or -1."""
    return _PRECEDENCE.get(op, -1)


def to_prefix(expr: list[str]) -> list[str]:
    """Convert an infix list of items to prefix order, dropping parentheses."""
    reversed_out: list[str] = []
    pending = Stack()
    for item in reversed(expr):
        head = item[:1]
        if _is_operand(item):
            reversed_out.append(item)
        elif head == ")":
            pending.push(item)
        elif head == "(":
            while pending and pending.peek() != ")":
                reversed_out.append(pending.pop())
            if pending:
                pending.pop()
        else:
            while pending and op_prec(head) < op_prec(pending.peek()[:1]):
                reversed_out.append(pending.pop())
            pending.push(item)
    reversed_out.extend(pending)
    return reversed_out[::-1]


def build_operation_tree(prefix: list[str]) -> Node | None:
    """Build an expression tree from items in prefix order.

    Operands become INT leaves; every other item is an operator taking the
    next two subtrees. Missing operands are left as None.
    """
    items = iter(prefix)

    def build() -> Node | None:
        item = next(items, None)
        if item is None:
            return None
        if _is_operand(item):
            return Node(item, TokenType.INT)
        node = Node(item, TokenType.OPERATOR)
        node.left = build()
        node.right = build()
        return node

    return build()


def _negate_group(values: list[str], start: int) -> None:
    """Flip the top-level signs of a parenthesised group beginning at ``start``."""
    nesting = Stack(["BUFFER"])
    k = start
    while nesting:
        if k >= len(values):
            raise ParseError("unbalanced parentheses in negated group")
        text = values[k]
        head = text[:1]
        if head == "(":
            nesting.push("(")
        elif head == ")":
            while nesting.peek() not in ("(", "BUFFER"):
                nesting.pop()
            nesting.pop()
        elif head in ("+", "-") and nesting.peek() == "BUFFER":
            if head == "+":
                values[k] = "-" + text[1:]
            elif values[k - 1][:1] not in ("/", "*"):
                values[k] = "+" + text[1:]
        k += 1


def expression_tokens(
    tokens: list[Token], pos: int, in_paren: bool
) -> tuple[Node | None, int]:
    """Parse the expression starting at ``pos``.

    With ``in_paren`` the expression ends at the ``)`` closing an already
    opened parenthesis; otherwise it ends at ``;``. Returns the expression
    tree and the position of the token that ended it. A lone integer
    followed by ``;`` is returned as a leaf with ``pos`` unchanged.
    """
    first = _at(tokens, pos)
    if not (
        first.value == "(" or first.type is TokenType.INT or first.value.startswith("-")
    ):
        raise ParseError(f"syntax error: expected an expression, got {first.value!r}")
    if first.type is TokenType.INT and _at(tokens, pos + 1).value.startswith(";"):
        return Node(first.value, first.type), pos

    values = [token.value for token in tokens]
    kinds = [token.type for token in tokens]
    nesting = Stack(["(" if in_paren else "BUFFERS"])
    expr: list[str] = []
    j = pos
    while nesting and j < len(tokens) and kinds[j] is not TokenType.EOFILE:
        value = values[j]
        if value.startswith(";") and not in_paren:
            nesting.pop()
        if in_paren:
            if value != ")":
                nesting.push(value)
            else:
                while nesting and nesting.peek() != "(":
                    nesting.pop()
                if nesting:
                    nesting.pop()
        if not nesting:
            break

        if not expr and value.startswith("-"):
            expr.append("0")
        elif (
            j > 0
            and kinds[j - 1] is TokenType.OPERATOR
            and not values[j - 1].startswith("=")
            and value.startswith("-")
        ):
            _at(tokens, j + 1)
            if kinds[j + 1] is TokenType.INT:
                merged = "-" + values[j + 1]
                values[j] = merged
                kinds[j] = TokenType.INT
                expr.append(merged)
                j += 2
                continue
            if values[j + 1].startswith("("):
                for item in (values[j + 1], "0", "-"):
                    nesting.push(item)
                    expr.append(item)
                j += 2
                _negate_group(values, j)
                _at(tokens, j)

        expr.append(values[j])
        j += 1

    return build_operation_tree(to_prefix(expr)), j


def format_tree(root: Node | None, label: str = "root", depth: int = 0) -> str:
    """Render a tree one node per line, indented by depth."""
    if root is None:
        return ""
    text = f"{'   ' * depth}{label}: {root.value}\n"
    if root.left:
        text += format_tree(root.left, "left", depth + 1)
    if root.right:
        text += format_tree(root.right, "right", depth + 1)
    return text


def _parse_exit(tokens: list[Token], root: Node, i: int) -> int:
    exit_node = Node(tokens[i].value, TokenType.KEYWORD)
    root.right = exit_node
    current = exit_node
    i += 1
    token = _at(tokens, i)
    if token.value == "(" and token.type is TokenType.SEPARATOR:
        open_node = Node(token.value, TokenType.SEPARATOR)
        exit_node.left = open_node
        current = open_node
        open_node.left, i = expression_tokens(tokens, i + 1, True)
        token = _at(tokens, i)
    if not token.value.startswith(")"):
        raise ParseError("expected ')' to close the exit argument")
    current.right = Node(token.value, TokenType.SEPARATOR)
    i += 1
    token = _at(tokens, i)
    if not token.value.startswith(";"):
        raise ParseError("expected ';' after the exit call")
    exit_node.right = Node(token.value, TokenType.SEPARATOR)
    return i + 1


def _parse_variable(tokens: list[Token], root: Node, i: int) -> int:
    var_node = Node(tokens[i].value, TokenType.KEYWORD)
    root.left = var_node
    i += 1
    token = _at(tokens, i)
    if token.type is not TokenType.IDENTIFIER:
        raise ParseError("syntax error: expected a variable name")
    ident = Node(token.value, token.type)
    var_node.left = ident
    i += 1
    token = _at(tokens, i)
    if token.type is not TokenType.OPERATOR:
        raise ParseError("syntax error: expected '=' after the variable name")
    if token.value != "=":
        raise ParseError(f"expected '=' but got {token.value!r}")
    assign = Node(token.value, token.type)
    ident.left = assign
    assign.left, i = expression_tokens(tokens, i + 1, False)
    if i < len(tokens):
        token = tokens[i]
        if token.type is TokenType.SEPARATOR and token.value.startswith(";"):
            var_node.right = Node(token.value, token.type)
    return i


def parse(tokens: list[Token]) -> Node:
    """Parse a token list into a tree rooted at a PROGRAM node.

    An ``exit(...)`` statement hangs on the right of the root and an
    ``int name = ...`` declaration on its left.
    """
    root = Node("PROGRAM", TokenType.BEGINNING)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.type is TokenType.KEYWORD:
            if token.value == "exit":
                i = _parse_exit(tokens, root, i) - 1
            elif token.value == "int":
                i = _parse_variable(tokens, root, i)
        elif token.type is TokenType.EOFILE:
            break
        i += 1
    return root