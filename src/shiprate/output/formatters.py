"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich key-value output) or
machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from shiprate.output.console import create_console, get_output

if TYPE_CHECKING:
    from shiprate.services.result import ServiceResult

_MONEY_KEYS = frozenset({"cost"})


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
    no_color: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON instead of human-readable text.
        quiet: Only the status line, no data.
        no_color: Disable ANSI escape codes.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        console.print(
            f"[ship.error]ERROR[/]: [ship.op]{result.op}[/] - {escape(message)}",
            end="",
            soft_wrap=True,
        )
        return get_output(console)

    console.print(f"[ship.ok]OK[/]: [ship.op]{result.op}[/]", end="", soft_wrap=True)
    if not quiet:
        for key, value in result.data.items():
            style = "ship.money" if key in _MONEY_KEYS else ""
            rendered = escape(_format_value(value))
            if style:
                rendered = f"[{style}]{rendered}[/]"
            console.print(f"\n  [ship.key]{key}[/]: {rendered}", end="", soft_wrap=True)
    return get_output(console)
