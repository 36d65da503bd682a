#!/usr/bin/env python3
"""
Guard the core package boundaries.

- core stays transport-agnostic: no server/transport imports
- core stays read-only: no calls to write-style HTTP helpers
  (.post/.put/.patch/.delete) on any object

Checks all Python files under src/honeybadger_mcp/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "honeybadger_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "starlette",
    "uvicorn",
    "mcp.server",
    "fastmcp",
    "honeybadger_mcp.transports",
    "honeybadger_mcp.server",
)

WRITE_METHODS = {"post", "put", "patch", "delete"}


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if is_forbidden(alias.name):
                    errors.append(f"{path}: forbidden import '{alias.name}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if mod and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.Call) and isinstance(node.func, ast.Attribute):
            if node.func.attr in WRITE_METHODS:
                errors.append(
                    f"{path}:{node.lineno}: write call '.{node.func.attr}()'"
                )
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
