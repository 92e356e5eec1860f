from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import EngineConfig, load_engine_config, read_data_file
from .demo import PAGE_TYPES, generate_demo_data
from .errors import SlotVarsError
from .report import RenderReport
from .templating import format_ast_tree, parse_template, process_template, process_variables
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="slotvars",
        description="Slot template engine: {{variables}}, {{#if}} and {{#each}}",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="подробный лог (DEBUG) в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для render/report
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "template",
            metavar="TEXT|@FILE|-",
            help="шаблон: прямая строка, @file для чтения из файла, или - для чтения из stdin",
        )
        sp.add_argument("--context", type=Path, metavar="FILE", help="данные магазина (YAML/JSON)")
        sp.add_argument("--page-data", type=Path, metavar="FILE", help="данные сущности страницы (YAML/JSON)")
        sp.add_argument(
            "--demo",
            action="store_true",
            help="использовать демо-данные редактора как context",
        )
        sp.add_argument("--config", type=Path, metavar="FILE", help="настройки движка (slotvars.yaml)")

    sp_render = sub.add_parser("render", help="Только финальный текст")
    add_common(sp_render)

    sp_report = sub.add_parser("report", help="JSON-отчёт: текст и счётчики маркеров")
    add_common(sp_report)

    sp_ast = sub.add_parser("ast", help="Дерево разбора шаблона (для отладки)")
    sp_ast.add_argument("template", metavar="TEXT|@FILE|-")

    sp_demo = sub.add_parser("demo", help="Демо-данные редактора (JSON)")
    sp_demo.add_argument("--page-type", choices=PAGE_TYPES, help="тип страницы")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("SLOTVARS_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s", stream=sys.stderr)


def _read_template(arg: str) -> str:
    """
    Парсит аргумент шаблона.

    Поддерживает три формата:
    - Прямая строка
    - Из файла: @path/to/template.html
    - Из stdin: -
    """
    if arg == "-":
        return sys.stdin.read()

    if arg.startswith("@"):
        file_path = Path(arg[1:])
        if not file_path.is_file():
            raise SlotVarsError(f"Template file not found: {file_path}")
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SlotVarsError(f"Failed to read template file {file_path}: {e}")

    return arg


def _read_data(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    if not path.is_file():
        raise SlotVarsError(f"Data file not found: {path}")
    return read_data_file(path)


def _inputs(ns: argparse.Namespace) -> tuple[str, Dict[str, Any], Dict[str, Any], EngineConfig]:
    template = _read_template(ns.template)
    context = generate_demo_data() if ns.demo else {}
    context.update(_read_data(ns.context))
    page_data = _read_data(ns.page_data)
    config = load_engine_config(ns.config)
    return template, context, page_data, config


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "render":
            template, context, page_data, config = _inputs(ns)
            sys.stdout.write(process_variables(template, context, page_data, config=config))
            return 0

        if ns.cmd == "report":
            template, context, page_data, config = _inputs(ns)
            text, meta = process_template(template, context, page_data, config=config)
            report = RenderReport.from_meta(text, meta)
            sys.stdout.write(_dumps(report.model_dump(mode="json", by_alias=True)))
            return 0

        if ns.cmd == "ast":
            sys.stdout.write(format_ast_tree(parse_template(_read_template(ns.template))) + "\n")
            return 0

        if ns.cmd == "demo":
            sys.stdout.write(_dumps(generate_demo_data(ns.page_type)))
            return 0

    except SlotVarsError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
