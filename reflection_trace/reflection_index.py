from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from . import constants as cs
from . import exceptions as ex
from . import logs as ls
from .decorators import timing_decorator
from .models import ClassEntity, MethodEntity, TraceRecord
from .source_resolver import SourceResolver
from .trace_parser import TraceFileParser
from .types_defs import (
    IndexExport,
    IndexSummary,
    KindSummary,
    ProgramModelProtocol,
    TargetDescriptor,
    TargetSets,
)

_EMPTY: frozenset[TargetDescriptor] = frozenset()


class ReflectionIndexBuilder:
    def __init__(self, program_model: ProgramModelProtocol) -> None:
        self.program_model = program_model
        self.resolver = SourceResolver(program_model)
        self._receivers: dict[
            cs.OperationKind, defaultdict[MethodEntity, set[TargetDescriptor]]
        ] = {kind: defaultdict(set) for kind in cs.OperationKind}
        self._built = False

    def _validate_target(self, record: TraceRecord) -> None:
        if not record.kind.targets_method:
            return
        if not self.program_model.contains_method(record.target):
            raise ex.UnresolvedTargetMethodError(record.target, record.kind)

    def add_record(self, record: TraceRecord) -> None:
        if self._built:
            raise ex.IndexFrozenError()

        call_sites = self.resolver.resolve_record(record)
        self._validate_target(record)

        receivers = self._receivers[record.kind]
        for call_site in call_sites:
            receivers[call_site].add(record.target)
            logger.trace(
                ls.RECORDED_TARGET.format(
                    kind=record.kind,
                    target=record.target,
                    signature=call_site.signature,
                )
            )

    def add_records(self, records: Iterable[TraceRecord]) -> None:
        for record in records:
            self.add_record(record)

    def build(self) -> ReflectionIndex:
        if self._built:
            raise ex.IndexFrozenError()
        self._built = True

        frozen = {
            kind: MappingProxyType(
                {method: frozenset(targets) for method, targets in receivers.items()}
            )
            for kind, receivers in self._receivers.items()
        }
        index = ReflectionIndex(self.program_model, MappingProxyType(frozen))
        totals = index.summary()
        logger.info(
            ls.INDEX_BUILT.format(
                call_sites=len(index.call_sites()),
                pairs=sum(s[cs.KEY_PAIRS] for s in totals.values()),
            )
        )
        return index


class ReflectionIndex:
    """Immutable per-call-site view of the reflective targets seen in a trace.

    The recorded sets never change after ``build()``. The class-based entity
    accessors go through ``resolve_class`` and may still load a class file into
    the program model on first use, so that model is mutated by queries.
    """

    def __init__(
        self,
        program_model: ProgramModelProtocol,
        receivers: MappingProxyType[cs.OperationKind, TargetSets],
    ) -> None:
        self._program_model = program_model
        self._receivers = receivers

    @classmethod
    @timing_decorator
    def from_trace_file(
        cls,
        trace_file: str | Path,
        program_model: ProgramModelProtocol,
        encoding: str = cs.ENCODING_UTF8,
    ) -> ReflectionIndex:
        builder = ReflectionIndexBuilder(program_model)
        builder.add_records(TraceFileParser(trace_file, encoding))
        return builder.build()

    @classmethod
    def from_records(
        cls, records: Iterable[TraceRecord], program_model: ProgramModelProtocol
    ) -> ReflectionIndex:
        builder = ReflectionIndexBuilder(program_model)
        builder.add_records(records)
        return builder.build()

    def names(
        self, kind: cs.OperationKind, container: MethodEntity
    ) -> frozenset[TargetDescriptor]:
        return self._receivers[kind].get(container, _EMPTY)

    def _resolve_class(self, kind: cs.OperationKind, class_name: str) -> ClassEntity:
        class_entity = self._program_model.resolve_class(class_name)
        if class_entity is None:
            raise ex.UnresolvedEntityError(class_name, kind)
        return class_entity

    def _resolve_method(self, kind: cs.OperationKind, signature: str) -> MethodEntity:
        method = self._program_model.get_method(signature)
        if method is None:
            raise ex.UnresolvedEntityError(signature, kind)
        return method

    def _classes(
        self, kind: cs.OperationKind, container: MethodEntity
    ) -> frozenset[ClassEntity]:
        return frozenset(
            self._resolve_class(kind, name) for name in self.names(kind, container)
        )

    def _methods(
        self, kind: cs.OperationKind, container: MethodEntity
    ) -> frozenset[MethodEntity]:
        return frozenset(
            self._resolve_method(kind, sig) for sig in self.names(kind, container)
        )

    def entities(
        self, kind: cs.OperationKind, container: MethodEntity
    ) -> frozenset[ClassEntity] | frozenset[MethodEntity]:
        if kind.targets_method:
            return self._methods(kind, container)
        return self._classes(kind, container)

    def class_for_name_class_names(
        self, container: MethodEntity
    ) -> frozenset[TargetDescriptor]:
        return self.names(cs.OperationKind.CLASS_FOR_NAME, container)

    def class_for_name_classes(self, container: MethodEntity) -> frozenset[ClassEntity]:
        return self._classes(cs.OperationKind.CLASS_FOR_NAME, container)

    def class_new_instance_class_names(
        self, container: MethodEntity
    ) -> frozenset[TargetDescriptor]:
        return self.names(cs.OperationKind.CLASS_NEW_INSTANCE, container)

    def class_new_instance_classes(
        self, container: MethodEntity
    ) -> frozenset[ClassEntity]:
        return self._classes(cs.OperationKind.CLASS_NEW_INSTANCE, container)

    def constructor_new_instance_signatures(
        self, container: MethodEntity
    ) -> frozenset[TargetDescriptor]:
        return self.names(cs.OperationKind.CONSTRUCTOR_NEW_INSTANCE, container)

    def constructor_new_instance_constructors(
        self, container: MethodEntity
    ) -> frozenset[MethodEntity]:
        return self._methods(cs.OperationKind.CONSTRUCTOR_NEW_INSTANCE, container)

    def method_invoke_signatures(
        self, container: MethodEntity
    ) -> frozenset[TargetDescriptor]:
        return self.names(cs.OperationKind.METHOD_INVOKE, container)

    def method_invoke_methods(self, container: MethodEntity) -> frozenset[MethodEntity]:
        return self._methods(cs.OperationKind.METHOD_INVOKE, container)

    def call_sites(self, kind: cs.OperationKind | None = None) -> list[MethodEntity]:
        kinds = [kind] if kind is not None else list(cs.OperationKind)
        seen: dict[MethodEntity, None] = {}
        for k in kinds:
            for method in self._receivers[k]:
                seen.setdefault(method, None)
        return sorted(seen, key=lambda m: m.signature)

    def summary(self) -> IndexSummary:
        return {
            str(kind): KindSummary(
                call_sites=len(receivers),
                pairs=sum(len(targets) for targets in receivers.values()),
            )
            for kind, receivers in self._receivers.items()
        }

    def to_dict(self) -> IndexExport:
        return {
            str(kind): {
                method.signature: sorted(targets)
                for method, targets in sorted(
                    receivers.items(), key=lambda item: item[0].signature
                )
            }
            for kind, receivers in self._receivers.items()
        }
