from __future__ import annotations

from loguru import logger

from . import constants as cs
from . import exceptions as ex
from . import logs as ls
from .models import ClassEntity, MethodEntity, TraceRecord
from .types_defs import ClassName, MethodName, ProgramModelProtocol


class SourceResolver:
    """Maps a trace call site onto the method entities it may denote.

    A unique method name resolves directly. Overloads are disambiguated by the
    first candidate, in declaration order, whose declaration, body, or any
    statement carries a line-range tag covering the recorded line. If no
    candidate covers it, every overload is returned so the observed target is
    attributed to all plausible call sites.
    """

    def __init__(self, program_model: ProgramModelProtocol) -> None:
        self.program_model = program_model

    def _resolve_class(self, class_name: ClassName) -> ClassEntity:
        if not self.program_model.contains_class(class_name):
            self.program_model.load_class_on_demand(class_name)
        class_entity = self.program_model.get_class(class_name)
        if class_entity is None:
            raise ex.UnresolvedSourceClassError(class_name)
        return class_entity

    def _find_by_line(
        self, candidates: tuple[MethodEntity, ...], line: int
    ) -> MethodEntity | None:
        if line == cs.UNKNOWN_LINE:
            return None
        for method in candidates:
            if method.covers_line(line):
                return method
        return None

    def resolve(
        self,
        class_name: ClassName,
        method_name: MethodName,
        line: int = cs.UNKNOWN_LINE,
    ) -> tuple[MethodEntity, ...]:
        class_entity = self._resolve_class(class_name)
        source = f"{class_name}{cs.SEPARATOR_DOT}{method_name}"

        candidates = class_entity.methods_named(method_name)
        if not candidates:
            raise ex.UnresolvedSourceMethodError(class_name, method_name)

        if len(candidates) == 1:
            (method,) = candidates
            logger.trace(
                ls.RESOLVED_UNIQUE.format(source=source, signature=method.signature)
            )
            return candidates

        if matched := self._find_by_line(candidates, line):
            logger.debug(
                ls.RESOLVED_BY_LINE.format(
                    source=source, line=line, signature=matched.signature
                )
            )
            return (matched,)

        logger.debug(
            ls.RESOLVED_FALLBACK.format(source=source, line=line, count=len(candidates))
        )
        return candidates

    def resolve_record(self, record: TraceRecord) -> tuple[MethodEntity, ...]:
        return self.resolve(record.source_class, record.source_method_name, record.line)
