#!/usr/bin/env python3
"""Check for banned Python constructions in shwords source.

Banned constructions:

    Construction          Reason                            Use instead
    --------------------  --------------------------------  --------------------------
    import shlex          shwords is the lexing authority,  shwords.core.lexer
    from shlex import     not the stdlib
    import pipes          removed from the stdlib (3.13)    shwords.core.quoter.quote
    except:               hides lexer bugs                  catch a specific exception
"""

import ast
import os
import sys

BANNED_MODULES = {
    "shlex": "use shwords.core.lexer for splitting and joining",
    "pipes": "use shwords.core.quoter.quote",
}


def find_python_files(directory):
    """Find all .py files recursively, skipping caches."""
    result = []
    for root, dirs, files in os.walk(directory):
        if "__pycache__" in dirs:
            dirs.remove("__pycache__")
        for f in files:
            if f.endswith(".py"):
                result.append(os.path.join(root, f))
    result.sort()
    return result


def check_source(source, filename="<string>"):
    """Return (lineno, description) pairs for every banned construction."""
    tree = ast.parse(source, filename)
    errors = []

    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)

        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name in BANNED_MODULES:
                    errors.append(
                        (lineno, f"import {alias.name}: banned, {BANNED_MODULES[alias.name]}")
                    )

        if isinstance(node, ast.ImportFrom):
            if node.module in BANNED_MODULES:
                errors.append(
                    (lineno, f"from {node.module} import: banned, {BANNED_MODULES[node.module]}")
                )

        if isinstance(node, ast.ExceptHandler) and node.type is None:
            errors.append((lineno, "bare except: banned, catch a specific exception"))

    return errors


def check_file(filepath):
    with open(filepath) as f:
        source = f.read()
    return check_source(source, filepath)


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    src_dir = argv[0] if argv else "src"

    if not os.path.isdir(src_dir):
        print(f"Directory not found: {src_dir}")
        return 1

    files = find_python_files(src_dir)
    if not files:
        print(f"No Python files found in: {src_dir}")
        return 1

    all_errors = []
    for filepath in files:
        try:
            for lineno, description in check_file(filepath):
                all_errors.append((filepath, lineno, description))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            return 1

    if not all_errors:
        return 0

    print(f"Found {len(all_errors)} banned construction(s):")
    for filepath, lineno, description in sorted(all_errors):
        print(f"  {filepath}:{lineno}: {description}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
