"""
Slot template interpreter.

Handlebars-like mini language used by storefront slots:
``{{path}}``, ``{{{path}}}``, ``{{#each}}``, ``{{#if}}``, ``{{#unless}}``,
``{{else}}`` and ``{{t 'key'}}``.
"""

from __future__ import annotations

from .nodes import TemplateAST
from .parser import TemplateParser, parse_template
from .processor import TemplateProcessor, process_variables
from .resolver import resolve_path
from .values import format_value

__all__ = [
    "TemplateAST",
    "TemplateParser",
    "TemplateProcessor",
    "parse_template",
    "process_variables",
    "resolve_path",
    "format_value",
]
