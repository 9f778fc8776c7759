"""Folds expression trees into x86-64 assembly and builds an executable."""

from __future__ import annotations

import io
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cobrac.lexer import TokenType
from cobrac.parser import Node

logger = logging.getLogger(__name__)

DEFAULT_ASM_PATH = Path("assembly") / "gencra.asm"
DEFAULT_CHECKOUT_PATH = Path("checkout")
EXIT_SYSCALL = 60
ASM_HEADER = "global _start\nsection .text\n_start:\n"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_ASM_TEMPLATES = {
    "+": "mov rax, {a}\nadd rax, {b}\n",
    "-": "mov rax, {a}\nsub rax, {b}\n",
    "*": "mov rax, {a}\nimul rax, {b}\n",
    "/": "mov rax, {a}\nmov r10, {b}\nidiv r10\n",
    "%": "mov rax, {a}\nmov r10, {b}\nidiv r10\nmov rax, rdx\n",
}


class CodegenError(RuntimeError):
    """Raised when code cannot be generated, assembled or linked."""


@dataclass
class SyscallState:
    """The system call a program is building up to while it is emitted."""

    call: str | None = None
    number: int = -1


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _truncated_divmod(a: int, b: int) -> tuple[int, int]:
    if b == 0:
        raise CodegenError("division by zero")
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


def apply_operator(a: int, b: int, op: str) -> int:
    """Apply an arithmetic operator with integer division truncating toward zero."""
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return _truncated_divmod(a, b)[0]
    if op == "%":
        return _truncated_divmod(a, b)[1]
    raise CodegenError(f"unknown operator {op!r}")


def operator_asm(a: int, b: int, op: str) -> tuple[str, int]:
    """Return the assembly computing ``a op b`` into rax, and its value."""
    template = _ASM_TEMPLATES.get(op)
    if template is None:
        raise CodegenError(f"unknown operator {op!r}")
    return template.format(a=a, b=b), apply_operator(a, b, op)


def lookup_syscall(call: str, path: str | Path = DEFAULT_CHECKOUT_PATH) -> int:
    """Find the number of ``call`` in a ``name number;`` table file."""
    try:
        content = Path(path).read_text()
    except OSError as exc:
        raise CodegenError(f"cannot read system call table {path}: {exc}") from exc
    for entry in content.rstrip().split(";"):
        parts = entry.split(maxsplit=1)
        if parts and parts[0] == call:
            return _atoi(parts[1]) if len(parts) > 1 else 0
    raise CodegenError(f"unknown system call {call!r}")


def fold_expression(node: Node | None, out: TextIO) -> int:
    """Fold an operation tree in place to an INT node, writing its assembly.

    Returns the value the tree folds to.
    """
    if node is None:
        raise CodegenError("empty operation tree")
    if node.type is TokenType.INT:
        return _atoi(node.value)
    if node.left is None or node.right is None:
        raise CodegenError(f"operator {node.value!r} is missing an operand")
    if node.left.type is TokenType.OPERATOR:
        fold_expression(node.left, out)
    if node.right.type is TokenType.OPERATOR:
        fold_expression(node.right, out)
    if node.left.type is TokenType.INT and node.right.type is TokenType.INT:
        text, value = operator_asm(
            _atoi(node.left.value), _atoi(node.right.value), node.value[:1]
        )
        out.write(text)
        node.value = str(value)
        node.type = TokenType.INT
    return _atoi(node.value)


def emit(root: Node | None, out: TextIO, state: SyscallState) -> None:
    """Walk the syntax tree and write the assembly for each statement."""
    if root is None:
        return
    if root.value == "exit":
        logger.debug("exit call found")
        state.call = "exit"
        state.number = EXIT_SYSCALL
    if root.type in (TokenType.INT, TokenType.OPERATOR) and not root.value.startswith("="):
        value = fold_expression(root, out)
        logger.debug("expression folded to %d", value)
        root.left = None
        root.right = None
        out.write("push rax\n")
    if state.call == "exit" and root.value == ";":
        out.write(f"{state.call}:\nmov rax, {state.number}\npop rdi\nsyscall\n")
    emit(root.left, out, state)
    emit(root.right, out, state)


def generate_assembly(root: Node) -> str:
    """Return the whole assembly program for a parsed tree."""
    out = io.StringIO()
    out.write(ASM_HEADER)
    emit(root, out, SyscallState())
    return out.getvalue()


def _run(command: list[str]) -> None:
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise CodegenError(f"cannot run {command[0]}: {exc}") from exc
    if result.returncode != 0:
        raise CodegenError(f"{command[0]} failed with status {result.returncode}")


def assemble(asm_path: str | Path) -> Path:
    """Assemble and link an assembly file; return the executable's path."""
    asm = Path(asm_path)
    obj = asm.with_suffix(".o")
    exe = asm.with_suffix("")
    try:
        _run(["nasm", "-f", "elf64", str(asm), "-o", str(obj)])
        _run(["ld", str(obj), "-o", str(exe)])
    finally:
        obj.unlink(missing_ok=True)
    return exe


def generate_code(root: Node, asm_path: str | Path = DEFAULT_ASM_PATH) -> Path:
    """Write the assembly for ``root`` and build it into an executable."""
    path = Path(asm_path)
    text = generate_assembly(root)
    try:
        path.write_text(text)
    except OSError as exc:
        raise CodegenError(f"cannot write {path}: {exc}") from exc
    return assemble(path)