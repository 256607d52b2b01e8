import json
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import constants as cs
from .config import settings
from .exceptions import ReflectionTraceError
from .program_model import JsonProgramModel
from .reflection_index import ReflectionIndex

app = typer.Typer(
    name="reflection-trace",
    help="Correlates a recorded trace of reflective calls (Class.forName, "
    "Class.newInstance, Constructor.newInstance, Method.invoke) with a static "
    "program model and reports the classes and methods each call site touched.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console(width=None)


def style(
    text: str, color: cs.Color, modifier: cs.StyleModifier = cs.StyleModifier.BOLD
) -> str:
    if modifier == cs.StyleModifier.NONE:
        return f"[{color}]{text}[/{color}]"
    return f"[{modifier} {color}]{text}[/{modifier} {color}]"


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    level = "DEBUG" if verbose else settings.LOG_LEVEL
    logger.add(sys.stderr, format=cs.LOG_FORMAT, level=level)


def _build_index(
    program: str | None, trace: str | None, class_path: str | None
) -> ReflectionIndex:
    try:
        program_file = settings.resolve_program_model_file(program)
        trace_file = settings.resolve_trace_file(trace)
    except ReflectionTraceError as e:
        message = cs.CLI_ERR_CONFIG.format(error=escape(str(e)))
        console.print(style(message, cs.Color.RED))
        raise typer.Exit(1) from e

    console.print(
        style(cs.CLI_MSG_LOADING_MODEL.format(path=program_file), cs.Color.CYAN)
    )
    console.print(
        style(cs.CLI_MSG_READING_TRACE.format(path=trace_file), cs.Color.CYAN)
    )
    try:
        model = JsonProgramModel.from_file(
            program_file, settings.resolve_class_path(class_path)
        )
        return ReflectionIndex.from_trace_file(
            trace_file, model, encoding=settings.TRACE_ENCODING
        )
    except ReflectionTraceError as e:
        message = cs.CLI_ERR_LOAD_INDEX.format(error=escape(str(e)))
        console.print(style(message, cs.Color.RED))
        raise typer.Exit(1) from e


def _summary_table(index: ReflectionIndex) -> Table:
    table = Table(title=style(cs.TABLE_TITLE_SUMMARY, cs.Color.GREEN))
    table.add_column(cs.TABLE_COL_KIND, style=cs.Color.CYAN)
    table.add_column(cs.TABLE_COL_CALL_SITES, justify="right")
    table.add_column(cs.TABLE_COL_PAIRS, justify="right")
    for kind, counts in index.summary().items():
        table.add_row(
            kind, str(counts[cs.KEY_CALL_SITES]), str(counts[cs.KEY_PAIRS])
        )
    return table


@app.command(help="Build the reflection index from a trace and summarize it")
def index(
    program: str | None = typer.Option(
        None, "--program", help="Path to the program model JSON file"
    ),
    trace: str | None = typer.Option(
        None, "--trace", help="Path to the reflection trace log"
    ),
    class_path: str | None = typer.Option(
        None,
        "--class-path",
        help="Directory of per-class JSON files loaded on demand",
    ),
    output: str | None = typer.Option(
        None, "-o", "--output", help="Export the index to a JSON file"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Log every parsed record and resolution"
    ),
) -> None:
    _setup_logging(verbose)
    reflection_index = _build_index(program, trace, class_path)

    console.print(style(cs.CLI_MSG_INDEX_BUILT, cs.Color.GREEN))
    console.print(_summary_table(reflection_index))

    if output:
        console.print(
            style(cs.CLI_MSG_EXPORTING_TO.format(path=output), cs.Color.CYAN)
        )
        Path(output).write_text(
            json.dumps(reflection_index.to_dict(), indent=cs.JSON_INDENT),
            encoding=cs.ENCODING_UTF8,
        )


@app.command(help="Show the reflective targets recorded for one call-site method")
def query(
    method: str = typer.Option(
        ...,
        "--method",
        help="Call-site method signature, e.g. '<pkg.Caller: void run(int)>'",
    ),
    program: str | None = typer.Option(
        None, "--program", help="Path to the program model JSON file"
    ),
    trace: str | None = typer.Option(
        None, "--trace", help="Path to the reflection trace log"
    ),
    class_path: str | None = typer.Option(
        None,
        "--class-path",
        help="Directory of per-class JSON files loaded on demand",
    ),
) -> None:
    _setup_logging(False)
    reflection_index = _build_index(program, trace, class_path)

    container = next(
        (m for m in reflection_index.call_sites() if m.signature == method), None
    )
    if container is None:
        message = cs.CLI_MSG_NO_ENTRIES.format(method=escape(method))
        console.print(style(message, cs.Color.YELLOW))
        return

    header = cs.CLI_MSG_QUERY_HEADER.format(method=escape(method))
    console.print(style(header, cs.Color.GREEN))
    for kind in cs.OperationKind:
        targets = sorted(reflection_index.names(kind, container))
        if not targets:
            continue
        console.print(style(kind, cs.Color.CYAN))
        for target in targets:
            console.print(f"  {target}", markup=False, highlight=False)


if __name__ == "__main__":
    app()
