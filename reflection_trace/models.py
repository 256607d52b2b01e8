from __future__ import annotations

from dataclasses import dataclass, field

from . import constants as cs


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int

    def covers(self, line: int) -> bool:
        return self.start <= line <= self.end


def covers_line(line_range: LineRange | None, line: int) -> bool:
    if line_range is None or line == cs.UNKNOWN_LINE:
        return False
    return line_range.covers(line)


@dataclass(frozen=True)
class Statement:
    text: str
    line_range: LineRange | None = None


@dataclass(frozen=True)
class MethodBody:
    line_range: LineRange | None = None
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class MethodEntity:
    declaring_class: str
    name: str
    return_type: str
    parameter_types: tuple[str, ...] = ()
    line_range: LineRange | None = field(default=None, compare=False)
    body: MethodBody | None = field(default=None, compare=False)

    @property
    def signature(self) -> str:
        return cs.SIGNATURE_TEMPLATE.format(
            cls=self.declaring_class,
            ret=self.return_type,
            name=self.name,
            params=cs.SEPARATOR_COMMA.join(self.parameter_types),
        )

    def covers_line(self, line: int) -> bool:
        """
        (H) Declaration tag first, then the body tag, then each statement tag.
        """
        if covers_line(self.line_range, line):
            return True
        if self.body is None:
            return False
        if covers_line(self.body.line_range, line):
            return True
        return any(covers_line(stmt.line_range, line) for stmt in self.body.statements)

    def __str__(self) -> str:
        return self.signature


@dataclass(frozen=True)
class ClassEntity:
    name: str
    methods: tuple[MethodEntity, ...] = field(default=(), compare=False)

    def methods_named(self, method_name: str) -> tuple[MethodEntity, ...]:
        return tuple(m for m in self.methods if m.name == method_name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TraceRecord:
    kind: cs.OperationKind
    target: str
    source_class: str
    source_method_name: str
    line: int = cs.UNKNOWN_LINE
    line_no: int = field(default=0, compare=False)

    @property
    def source(self) -> str:
        return f"{self.source_class}{cs.SEPARATOR_DOT}{self.source_method_name}"

    @property
    def has_line(self) -> bool:
        return self.line != cs.UNKNOWN_LINE
