from enum import StrEnum


class OperationKind(StrEnum):
    CLASS_FOR_NAME = "Class.forName"
    CLASS_NEW_INSTANCE = "Class.newInstance"
    CONSTRUCTOR_NEW_INSTANCE = "Constructor.newInstance"
    METHOD_INVOKE = "Method.invoke"

    @property
    def targets_method(self) -> bool:
        return self in METHOD_TARGET_KINDS


# (H) Kinds whose target is a method signature validated at load time
METHOD_TARGET_KINDS = frozenset(
    {OperationKind.CONSTRUCTOR_NEW_INSTANCE, OperationKind.METHOD_INVOKE}
)


class Color(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    CYAN = "cyan"
    RED = "red"


class StyleModifier(StrEnum):
    BOLD = "bold"
    NONE = ""


# (H) Trace file format
TRACE_FIELD_SEPARATOR = ";"
TRACE_FIELD_COUNT = 4
UNKNOWN_LINE = -1

# (H) Separators
SEPARATOR_DOT = "."
SEPARATOR_COMMA = ","

# (H) Method signatures
SIGNATURE_TEMPLATE = "<{cls}: {ret} {name}({params})>"

# (H) Program model JSON keys
KEY_CLASSES = "classes"
KEY_NAME = "name"
KEY_METHODS = "methods"
KEY_RETURN_TYPE = "return_type"
KEY_PARAMETER_TYPES = "parameter_types"
KEY_LINE_RANGE = "line_range"
KEY_BODY = "body"
KEY_STATEMENTS = "statements"
KEY_TEXT = "text"
KEY_START = "start"
KEY_END = "end"

# (H) Index export keys
KEY_CALL_SITES = "call_sites"
KEY_PAIRS = "pairs"

# (H) File extensions
CLASS_FILE_EXT = ".json"

# (H) Encoding
ENCODING_UTF8 = "utf-8"

# (H) Logger format
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
DEFAULT_LOG_LEVEL = "INFO"

# (H) JSON export
JSON_INDENT = 2

# (H) CLI messages
CLI_ERR_LOAD_INDEX = "Failed to build reflection index: {error}"
CLI_ERR_CONFIG = "Configuration Error: {error}"
CLI_MSG_LOADING_MODEL = "Loading program model from: {path}"
CLI_MSG_READING_TRACE = "Reading reflection trace: {path}"
CLI_MSG_EXPORTING_TO = "Exporting reflection index to: {path}"
CLI_MSG_INDEX_BUILT = "Reflection index built."
CLI_MSG_NO_ENTRIES = "No reflective operations recorded for: {method}"
CLI_MSG_QUERY_HEADER = "Reflective targets of {method}:"

# (H) CLI table
TABLE_TITLE_SUMMARY = "Reflection Index Summary"
TABLE_COL_KIND = "Operation"
TABLE_COL_CALL_SITES = "Call sites"
TABLE_COL_PAIRS = "Targets"
