from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from reflection_trace.models import (
    ClassEntity,
    LineRange,
    MethodBody,
    MethodEntity,
    Statement,
)
from reflection_trace.program_model import JsonProgramModel
from reflection_trace.types_defs import ClassData, ProgramModelData

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

logger.remove()

RUN_SIGNATURE = "<pkg.Caller: void run()>"
RUN_INT_SIGNATURE = "<pkg.Caller: void run(int)>"
START_SIGNATURE = "<pkg.Caller: void start()>"
PLUGIN_INIT_SIGNATURE = "<foo.Plugin: void <init>()>"
PLUGIN_EXECUTE_SIGNATURE = "<foo.Plugin: java.lang.Object execute(java.lang.String)>"


def method(
    cls: str,
    name: str,
    params: tuple[str, ...] = (),
    ret: str = "void",
    decl: tuple[int, int] | None = None,
    body: tuple[int, int] | None = None,
    statements: tuple[tuple[int, int], ...] = (),
    with_body: bool = True,
) -> MethodEntity:
    method_body = None
    if with_body:
        method_body = MethodBody(
            line_range=LineRange(*body) if body else None,
            statements=tuple(
                Statement(text=f"stmt{i}", line_range=LineRange(*rng))
                for i, rng in enumerate(statements)
            ),
        )
    return MethodEntity(
        declaring_class=cls,
        name=name,
        return_type=ret,
        parameter_types=params,
        line_range=LineRange(*decl) if decl else None,
        body=method_body,
    )


def caller_class(
    run_range: tuple[int, int] | None = (5, 8),
    run_int_range: tuple[int, int] | None = (10, 14),
) -> ClassEntity:
    return ClassEntity(
        name="pkg.Caller",
        methods=(
            method("pkg.Caller", "run", decl=run_range),
            method("pkg.Caller", "run", ("int",), decl=run_int_range),
            method("pkg.Caller", "start", decl=(20, 30)),
        ),
    )


def plugin_class() -> ClassEntity:
    return ClassEntity(
        name="foo.Plugin",
        methods=(
            method("foo.Plugin", "<init>"),
            method(
                "foo.Plugin",
                "execute",
                ("java.lang.String",),
                ret="java.lang.Object",
            ),
        ),
    )


@pytest.fixture
def program_model() -> JsonProgramModel:
    return JsonProgramModel(
        [caller_class(), plugin_class(), ClassEntity(name="foo.Bar")]
    )


@pytest.fixture
def untagged_program_model() -> JsonProgramModel:
    return JsonProgramModel(
        [caller_class(run_range=None, run_int_range=None), plugin_class()]
    )


def method_data(
    name: str,
    params: list[str] | None = None,
    ret: str = "void",
    line_range: tuple[int, int] | None = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": name,
        "return_type": ret,
        "parameter_types": params or [],
        "body": {"statements": []},
    }
    if line_range is not None:
        data["line_range"] = {"start": line_range[0], "end": line_range[1]}
    return data


def create_program_data() -> ProgramModelData:
    caller: ClassData = {
        "name": "pkg.Caller",
        "methods": [
            method_data("run", line_range=(5, 8)),
            method_data("run", ["int"], line_range=(10, 14)),
        ],
    }
    plugin: ClassData = {
        "name": "foo.Plugin",
        "methods": [
            method_data("<init>"),
            method_data("execute", ["java.lang.String"], ret="java.lang.Object"),
        ],
    }
    return {"classes": [caller, plugin]}


@pytest.fixture
def program_file(tmp_path: Path) -> Path:
    path = tmp_path / "program.json"
    path.write_text(json.dumps(create_program_data()), encoding="utf-8")
    return path


@pytest.fixture
def write_trace(tmp_path: Path) -> Callable[..., Path]:
    def _write(*lines: str, name: str = "trace.log") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(str(message))

    handler_id = logger.add(sink, format="{message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)
