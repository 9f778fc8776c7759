# cobrac

`cobrac` is a small compiler for a toy language. It reads a source file,
writes x86-64 NASM assembly, and then runs `nasm` and `ld` to build a Linux
executable.

## Language

The language has two statements:

```
int x = 3 + 4 * 2;
exit(10 - (2 * 3) % 4);
```

- `exit(<expr>);` ends the program. The value of the expression becomes the
  exit status.
- `int <name> = <expr>;` evaluates the expression and pushes the result on
  the stack.

Expressions are made of integer literals, parentheses, unary minus and the
operators `+ - * / %`, with the usual precedence. Division and remainder
truncate toward zero. Constant sub-expressions are folded while code is
generated, and each folding step is also written out as assembly.

Spaces and newlines are skipped. Any other character outside the language is
an error.

## Installation

```
pip install .
```

To build executables you also need `nasm` and `ld` on your `PATH`.

## Usage

```
cobrac program.cb
```

The command:

1. prints each token of the source;
2. writes the assembly to `assembly/gencra.asm` (the `assembly` directory
   must already exist), or to the path given with `-o`/`--output`;
3. assembles and links that file with `nasm -f elf64` and `ld` into an
   executable of the same name without the suffix (`assembly/gencra`), and
   removes the intermediate object file.

Run the result and check its exit status:

```
./assembly/gencra; echo $?
```

The command exits with status 1 and a message on standard error when the
source file cannot be read, when it holds an unknown character, when a
bracket, semicolon or `=` is missing or a declaration is malformed, or when
the assembly cannot be written, assembled or linked.

## Library use

The stages can also be called from Python:

```python
from cobrac.lexer import tokenize
from cobrac.parser import parse, format_tree
from cobrac.codegen import generate_assembly

tokens = tokenize("exit(2 + 3);")
tree = parse(tokens)
print(format_tree(tree, "root", 0))
print(generate_assembly(tree))
```

- `cobrac.lexer`: `tokenize`, `format_token`, `Token`, `TokenType`,
  `LexerError`.
- `cobrac.parser`: `parse`, `expression_tokens`, `to_prefix`,
  `build_operation_tree`, `op_prec`, `format_tree`, `Node`, `ParseError`.
- `cobrac.codegen`: `generate_assembly`, `generate_code`, `assemble`,
  `emit`, `fold_expression`, `apply_operator`, `operator_asm`,
  `lookup_syscall` (reads a `name number;` table file, `checkout` by
  default), `SyscallState`, `CodegenError`.
- `cobrac.stack`: `Stack`, a small LIFO stack of strings.

## Limitations

- Variable names are parsed but not stored. A declared variable cannot be
  read back later.
- A program holds at most one declaration and one `exit` call. A later
  statement of the same kind replaces the earlier one in the tree.
- Only `exit` is turned into a system call, with number 60.
- Building an executable needs Linux with `nasm` and `ld` installed.

## Running the tests

```
pip install .[test]
pytest
```