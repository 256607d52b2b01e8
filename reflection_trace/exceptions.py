# (H) Trace file errors
TRACE_FILE_NOT_FOUND = "Trace file not found: {path}"
TRACE_FILE_IO = "Failed to read trace file {path}: {error}"
TRACE_FILE_NOT_CONFIGURED = (
    "Trace based reflection model enabled but no trace file given. "
    "Pass --trace or set TRACE_FILE in .env file."
)

# (H) Record format errors
FIELD_COUNT = "expected {expected} ';'-separated fields, found {found}"
UNKNOWN_KIND = "unknown entry kind '{kind}'"
BAD_LINE_NUMBER = "line number '{value}' is not a decimal integer"
EMPTY_TARGET = "empty target descriptor"
BAD_SOURCE = "source '{source}' is not of the form <class>.<method>"
MALFORMED_RECORD = "{path}:{line_no}: malformed trace record: {reason}"

# (H) Resolution errors
UNKNOWN_SOURCE_CLASS = "Trace file refers to unknown class: {class_name}"
UNKNOWN_SOURCE_METHOD = (
    "Trace file refers to unknown method with name {method_name} "
    "in class {class_name}"
)
UNKNOWN_TARGET_METHOD = "Unknown method for signature: {signature} ({kind})"
UNRESOLVED_ENTITY = "Cannot resolve {kind} target '{descriptor}' in program model"
INDEX_FROZEN = "Reflection index has already been built; no more records accepted"

# (H) Program model errors
PROGRAM_MODEL_NOT_FOUND = "Program model file not found: {path}"
PROGRAM_MODEL_NOT_CONFIGURED = (
    "No program model given. Pass --program or set PROGRAM_MODEL_FILE in .env file."
)
PROGRAM_MODEL_INVALID = "Invalid program model in {path}: {error}"
CLASS_FILE_MISMATCH = "Class file {path} declares '{found}', expected '{expected}'"
DUPLICATE_CLASS = "Duplicate class in program model: {class_name}"
DUPLICATE_METHOD = "Duplicate method in program model: {signature}"
BAD_LINE_BOUND = "line range bound {value!r} is not an integer"


# (H) Exception classes
class ReflectionTraceError(Exception):
    pass


class TraceFileNotFoundError(ReflectionTraceError, FileNotFoundError):
    def __init__(self, path: object) -> None:
        super().__init__(TRACE_FILE_NOT_FOUND.format(path=path))
        self.path = path


class TraceFileIOError(ReflectionTraceError):
    def __init__(self, path: object, error: Exception) -> None:
        super().__init__(TRACE_FILE_IO.format(path=path, error=error))
        self.path = path


class TraceFileNotConfiguredError(ReflectionTraceError):
    def __init__(self) -> None:
        super().__init__(TRACE_FILE_NOT_CONFIGURED)


class MalformedRecordError(ReflectionTraceError):
    def __init__(self, path: object, line_no: int, reason: str) -> None:
        super().__init__(
            MALFORMED_RECORD.format(path=path, line_no=line_no, reason=reason)
        )
        self.path = path
        self.line_no = line_no
        self.reason = reason


class UnresolvedSourceClassError(ReflectionTraceError):
    def __init__(self, class_name: str) -> None:
        super().__init__(UNKNOWN_SOURCE_CLASS.format(class_name=class_name))
        self.class_name = class_name


class UnresolvedSourceMethodError(ReflectionTraceError):
    def __init__(self, class_name: str, method_name: str) -> None:
        super().__init__(
            UNKNOWN_SOURCE_METHOD.format(
                class_name=class_name, method_name=method_name
            )
        )
        self.class_name = class_name
        self.method_name = method_name


class UnresolvedTargetMethodError(ReflectionTraceError):
    def __init__(self, signature: str, kind: str) -> None:
        super().__init__(UNKNOWN_TARGET_METHOD.format(signature=signature, kind=kind))
        self.signature = signature
        self.kind = kind


class UnresolvedEntityError(ReflectionTraceError):
    def __init__(self, descriptor: str, kind: str) -> None:
        super().__init__(UNRESOLVED_ENTITY.format(descriptor=descriptor, kind=kind))
        self.descriptor = descriptor
        self.kind = kind


class IndexFrozenError(ReflectionTraceError):
    def __init__(self) -> None:
        super().__init__(INDEX_FROZEN)


class ProgramModelError(ReflectionTraceError):
    pass
