"""A tiny compiler for a toy language: lexer, parser and x86-64 NASM code generator."""

__version__ = "0.1.0"
__all__ = ["__version__"]