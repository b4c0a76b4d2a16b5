from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config.load import StoreConfig, load_store_config
from .config.paths import cfg_root
from .context import build_context
from .demo import generate_demo_data
from .errors import DataFileError, SlotgenUserError
from .jsonic import dumps as jdumps
from .report_schema import RenderReport
from .template import TemplateProcessor
from .types import DEFAULT_LANG, PageType, RenderOptions
from .version import tool_version

logger = logging.getLogger("slotgen")

_yaml = YAML(typ="safe")

DEBUG_ENV = "SLOTGEN_DEBUG"
STDIN_MARK = "@-"


class _WarningCounter(logging.Handler):
    """Counts WARNING+ records emitted while rendering (for --report)."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.count = 0

    def emit(self, record: logging.LogRecord) -> None:
        self.count += 1


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV) else logging.WARNING
    logger.setLevel(level)
    if not any(getattr(h, "_slotgen_cli", False) for h in logger.handlers):
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        h._slotgen_cli = True  # type: ignore[attr-defined]
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="slotgen",
        description="Storefront slot template renderer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    page_types = [t.value for t in PageType]

    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("page_type", metavar="PAGE_TYPE", help=f"one of: {', '.join(page_types)}")
        sp.add_argument("--data", metavar="FILE", help="raw page data (JSON or YAML)")
        sp.add_argument(
            "--config",
            metavar="DIR",
            help="store configuration directory (default: ./slot-cfg)",
        )
        sp.add_argument("--lang", default=None, help="active language code (default: en)")

    sp_render = sub.add_parser("render", help="Render a slot template (text)")
    add_common(sp_render)
    sp_render.add_argument(
        "--template",
        required=True,
        metavar="FILE|@-",
        help="template file, or @- to read it from stdin",
    )
    sp_render.add_argument(
        "--strict-scope",
        action="store_true",
        help="loop items never shadow store/settings/translations/currentLanguage",
    )
    sp_render.add_argument("--report", action="store_true", help="print a JSON report instead of text")

    sp_context = sub.add_parser("context", help="Print the variable context (JSON)")
    add_common(sp_context)

    sp_demo = sub.add_parser("demo", help="Print preview data (JSON)")
    sp_demo.add_argument("page_type", nargs="?", default=None, metavar="PAGE_TYPE")

    return p


def _read_text(arg: str) -> tuple[str, str]:
    """(text, source name) for a FILE or @- argument."""
    if arg == STDIN_MARK:
        return sys.stdin.read(), "<stdin>"
    path = Path(arg)
    try:
        return path.read_text(encoding="utf-8"), str(path)
    except OSError as e:
        raise DataFileError(path, e.strerror or str(e)) from e


def _load_data(arg: Optional[str]) -> Dict[str, Any]:
    if not arg:
        return {}
    text, source = _read_text(arg)
    try:
        data = json.loads(text) if source.endswith(".json") else _yaml.load(text)
    except (ValueError, YAMLError) as e:
        raise DataFileError(Path(source), f"not valid JSON/YAML: {e}") from e
    data = data or {}
    if not isinstance(data, dict):
        raise DataFileError(Path(source), "top-level value must be an object")
    return data


def _load_config(ns: argparse.Namespace) -> StoreConfig:
    cfg_dir = Path(ns.config) if ns.config else cfg_root(Path.cwd())
    return load_store_config(cfg_dir)


def _context(ns: argparse.Namespace) -> Dict[str, Any]:
    if PageType.parse(ns.page_type) is None:
        raise ValueError(
            f"Unknown page type '{ns.page_type}'. Expected one of: {', '.join(t.value for t in PageType)}"
        )
    cfg = _load_config(ns)
    return build_context(
        ns.page_type,
        _load_data(ns.data),
        cfg.store,
        cfg.settings,
        translations=cfg.translations,
        product_labels=cfg.product_labels,
        language=ns.lang or DEFAULT_LANG,
    )


def _render(ns: argparse.Namespace) -> int:
    template, _ = _read_text(ns.template)
    counter = _WarningCounter()
    logger.addHandler(counter)
    try:
        context = _context(ns)
        processor = TemplateProcessor(RenderOptions(
            language=ns.lang,
            item_keys_shadow_context=not ns.strict_scope,
        ))
        rendered = processor.process(template, context)
    finally:
        logger.removeHandler(counter)

    if ns.report:
        report = RenderReport(
            tool_version=tool_version(),
            page_type=ns.page_type,
            language=context.get("currentLanguage") or DEFAULT_LANG,
            template_length=len(template),
            rendered=rendered,
            rendered_length=len(rendered),
            warnings=counter.count,
        )
        sys.stdout.write(jdumps(report.model_dump(mode="json", by_alias=True)) + "\n")
    else:
        sys.stdout.write(rendered)
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        if ns.cmd == "render":
            return _render(ns)

        if ns.cmd == "context":
            sys.stdout.write(jdumps(_context(ns)) + "\n")
            return 0

        if ns.cmd == "demo":
            sys.stdout.write(jdumps(generate_demo_data(ns.page_type)) + "\n")
            return 0

    except SlotgenUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
