from reflection_trace.config import settings
from reflection_trace.constants import OperationKind
from reflection_trace.models import ClassEntity, MethodEntity, TraceRecord
from reflection_trace.program_model import JsonProgramModel
from reflection_trace.reflection_index import ReflectionIndex, ReflectionIndexBuilder
from reflection_trace.source_resolver import SourceResolver
from reflection_trace.trace_parser import TraceFileParser, parse_trace_file

__all__ = [
    "ClassEntity",
    "JsonProgramModel",
    "MethodEntity",
    "OperationKind",
    "ReflectionIndex",
    "ReflectionIndexBuilder",
    "SourceResolver",
    "TraceFileParser",
    "TraceRecord",
    "parse_trace_file",
    "settings",
]
