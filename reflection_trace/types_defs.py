from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, NotRequired, Protocol, TypedDict

if TYPE_CHECKING:
    from .models import ClassEntity, MethodEntity

type ClassName = str
type MethodName = str
type MethodSignature = str
type TargetDescriptor = str

type TargetSets = Mapping["MethodEntity", frozenset[TargetDescriptor]]


class LineRangeData(TypedDict):
    start: int
    end: int


class StatementData(TypedDict):
    text: str
    line_range: NotRequired[LineRangeData | None]


class MethodBodyData(TypedDict):
    line_range: NotRequired[LineRangeData | None]
    statements: NotRequired[list[StatementData]]


class MethodData(TypedDict):
    name: str
    return_type: str
    parameter_types: NotRequired[list[str]]
    line_range: NotRequired[LineRangeData | None]
    body: NotRequired[MethodBodyData | None]


class ClassData(TypedDict):
    name: str
    methods: NotRequired[list[MethodData]]


class ProgramModelData(TypedDict):
    classes: list[ClassData]


class KindSummary(TypedDict):
    call_sites: int
    pairs: int


type IndexSummary = dict[str, KindSummary]
type IndexExport = dict[str, dict[MethodSignature, list[TargetDescriptor]]]


class ProgramModelProtocol(Protocol):
    def contains_class(self, class_name: ClassName) -> bool: ...

    def load_class_on_demand(self, class_name: ClassName) -> bool: ...

    def get_class(self, class_name: ClassName) -> ClassEntity | None: ...

    def resolve_class(self, class_name: ClassName) -> ClassEntity | None: ...

    def contains_method(self, signature: MethodSignature) -> bool: ...

    def get_method(self, signature: MethodSignature) -> MethodEntity | None: ...
