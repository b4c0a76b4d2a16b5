"""
Slot template interpreter.

Evaluates a parsed template against a variable context. Order of work:

- top level: loops, conditionals, translations and variables are evaluated
  against the page scope;
- inside every loop iteration the conditionals of the body (including those
  inside nested loop bodies) are decided first with the iteration scope, then
  nested loops are expanded, then translations and variables are rendered.

Loop nesting is limited by RenderOptions.max_loop_depth; a loop nested
deeper is emitted as written and a warning is logged. Substituted values are
never interpreted as template markup again.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .nodes import EachNode, IfNode, TemplateAST, TemplateNode, TextNode, TranslationNode, VariableNode
from .parser import TemplateParser
from .resolver import resolve_path
from .translations import translate, ui_translations_of
from .values import render_variable
from ..conditions.evaluator import ConditionEvaluator, EvaluationError
from ..conditions.lexer import ConditionLexError
from ..conditions.model import Condition
from ..conditions.parser import ConditionParseError, ConditionParser
from ..types import DEFAULT_LANG, RESERVED_CONTEXT_KEYS, RenderOptions

logger = logging.getLogger(__name__)

# Parsed templates and conditions kept per processor
CACHE_SIZE = 256


def _remember(cache: Dict[str, Any], key: str, value: Any) -> None:
    """Store a cache entry, dropping the oldest one when the cache is full."""
    if len(cache) >= CACHE_SIZE:
        del cache[next(iter(cache))]
    cache[key] = value


class _RenderState:
    """Per-call values shared by every iteration."""

    def __init__(self, language: str, ui_translations: Mapping[str, Any]):
        self.language = language
        self.ui_translations = ui_translations


class TemplateProcessor:
    """
    Renders slot templates.

    Parsed templates and conditions are cached by their source text (at most
    CACHE_SIZE of each, oldest dropped first), so a single processor can be
    reused across slots and pages.
    """

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()
        self.parser = TemplateParser()
        self.condition_parser = ConditionParser()
        self._template_cache: Dict[str, TemplateAST] = {}
        self._condition_cache: Dict[str, Optional[Condition]] = {}

    def parse(self, text: str) -> TemplateAST:
        """Parsed template, from cache when seen before."""
        cached = self._template_cache.get(text)
        if cached is not None:
            return cached
        ast = self.parser.parse(text)
        _remember(self._template_cache, text, ast)
        return ast

    def process(
        self,
        content: Any,
        context: Mapping[str, Any],
        page_data: Optional[Mapping[str, Any]] = None,
        *,
        language: Optional[str] = None,
    ) -> Any:
        """
        Render a template string.

        Args:
            content: Template text; anything else is returned unchanged
            context: Variable context (usually built by build_context)
            page_data: Extra values overriding context keys
            language: Active locale for {{t}}; defaults to the options,
                then the context's currentLanguage, then "en"

        Returns:
            Rendered text
        """
        if not isinstance(content, str):
            return content

        scope: Dict[str, Any] = {**context, **(page_data or {})}
        state = _RenderState(
            language=language or self.options.language or scope.get("currentLanguage") or DEFAULT_LANG,
            ui_translations=ui_translations_of(scope),
        )
        return self._render(self.parse(content), scope, state, depth=0)

    # Rendering

    def _render(self, nodes: TemplateAST, scope: Mapping[str, Any], state: _RenderState, depth: int) -> str:
        out: List[str] = []
        for node in nodes:
            if isinstance(node, TextNode):
                out.append(node.text)
            elif isinstance(node, VariableNode):
                out.append(render_variable(node.path, scope, raw=node.raw))
            elif isinstance(node, TranslationNode):
                out.append(translate(node.key, state.ui_translations, state.language))
            elif isinstance(node, IfNode):
                branch = node.then_body if self._branch_taken(node, scope) else node.else_body
                out.append(self._render(branch, scope, state, depth))
            elif isinstance(node, EachNode):
                out.append(self._expand_each(node, scope, state, depth))
        return "".join(out)

    def _expand_each(self, node: EachNode, scope: Mapping[str, Any], state: _RenderState, depth: int) -> str:
        if depth > self.options.max_loop_depth:
            logger.warning(f"Max loop nesting depth ({self.options.max_loop_depth}) reached at '{node.path}'")
            return node.source

        items = resolve_path(node.path, scope)
        if not isinstance(items, (list, tuple)) or not items:
            return ""

        out: List[str] = []
        for index, item in enumerate(items):
            item_scope = self._item_scope(scope, item, index)
            body = self._decide_conditionals(node.body, item_scope)
            out.append(self._render(body, item_scope, state, depth + 1))
        return "".join(out)

    def _item_scope(self, scope: Mapping[str, Any], item: Any, index: int) -> Dict[str, Any]:
        item_scope: Dict[str, Any] = dict(scope)
        if self.options.item_keys_shadow_context:
            item_scope["this"] = item
            if isinstance(item, Mapping):
                item_scope.update(item)
        else:
            if isinstance(item, Mapping):
                item_scope.update({k: v for k, v in item.items() if k not in RESERVED_CONTEXT_KEYS})
            item_scope["this"] = item
        item_scope["@index"] = index
        return item_scope

    def _decide_conditionals(self, nodes: TemplateAST, scope: Mapping[str, Any]) -> TemplateAST:
        """Replace every conditional (nested loop bodies included) by the branch it selects."""
        out: List[TemplateNode] = []
        for node in nodes:
            if isinstance(node, IfNode):
                branch = node.then_body if self._branch_taken(node, scope) else node.else_body
                out.extend(self._decide_conditionals(branch, scope))
            elif isinstance(node, EachNode):
                out.append(EachNode(path=node.path, body=self._decide_conditionals(node.body, scope), source=node.source))
            else:
                out.append(node)
        return out

    # Conditions

    def _branch_taken(self, node: IfNode, scope: Mapping[str, Any]) -> bool:
        """True when the first branch of the block is rendered."""
        value = self.evaluate_condition(node.condition, scope)
        return not value if node.inverted else value

    def evaluate_condition(self, condition_text: str, scope: Mapping[str, Any]) -> bool:
        """
        Value of a condition; malformed or failing conditions are false.
        """
        condition = self._parse_condition(condition_text)
        if condition is None:
            return False
        try:
            return ConditionEvaluator(lambda path: resolve_path(path, scope)).evaluate(condition)
        except EvaluationError as e:
            logger.warning(f"Error evaluating condition '{condition_text}': {e}")
            return False

    def _parse_condition(self, condition_text: str) -> Optional[Condition]:
        if condition_text in self._condition_cache:
            return self._condition_cache[condition_text]
        try:
            condition: Optional[Condition] = self.condition_parser.parse(condition_text)
        except (ConditionParseError, ConditionLexError) as e:
            logger.warning(f"Invalid condition '{condition_text}': {e}")
            condition = None
        _remember(self._condition_cache, condition_text, condition)
        return condition


def process_variables(
    content: Any,
    context: Mapping[str, Any],
    page_data: Optional[Mapping[str, Any]] = None,
    *,
    language: Optional[str] = None,
    options: Optional[RenderOptions] = None,
) -> Any:
    """
    Render a slot template against a variable context.

    Non-string content is returned unchanged. Every call uses a fresh
    processor; keep a TemplateProcessor around to reuse parsed templates.
    """
    processor = TemplateProcessor(options)
    return processor.process(content, context, page_data, language=language)


__all__ = ["CACHE_SIZE", "TemplateProcessor", "process_variables"]
