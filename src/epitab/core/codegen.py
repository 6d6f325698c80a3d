"""Reproducible code snippets for tabulation calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CodeSnippet:
    """A single code operation with its required imports."""
    code: str
    imports: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Return the snippet as a runnable script (imports first)."""
        header = sorted(set(self.imports))
        if header:
            return "\n".join(header) + "\n\n" + self.code + "\n"
        return self.code + "\n"


def call_snippet(
    func_name: str,
    args: list[Any],
    kwargs: dict[str, Any],
    defaults: dict[str, Any],
    target: str = "result",
) -> CodeSnippet:
    """Build a snippet calling ``epitab.<func_name>`` with the given arguments.

    Keyword arguments equal to their default are left out so the emitted
    call reads the way a person would type it.
    """
    parts = ["df"] + [repr(a) for a in args]
    for key, value in kwargs.items():
        if key in defaults and defaults[key] == value and type(defaults[key]) is type(value):
            continue
        parts.append(f"{key}={value!r}")

    code = f"{target} = {func_name}({', '.join(parts)})"
    return CodeSnippet(code=code, imports=[f"from epitab import {func_name}"])
