# (H) Program model logs
LOADING_MODEL = "Loading program model from {path}"
LOADED_MODEL = "Loaded {classes} classes and {methods} methods"
LOADING_CLASS_ON_DEMAND = "Class {class_name} not in program model, loading on demand"
CLASS_FILE_MISSING = "No class file for {class_name} at {path}"
LOADED_CLASS = "Loaded class {class_name} with {methods} methods from {path}"

# (H) Trace parsing logs
READING_TRACE = "Reading reflection trace from {path}"
SKIPPED_BLANK = "Skipping blank trace line {line_no}"
PARSED_RECORD = "Parsed {kind} record at line {line_no}: {target} <- {source}"
TRACE_EXHAUSTED = "Read {records} reflection records from {path}"

# (H) Source resolution logs
RESOLVED_UNIQUE = "Resolved {source} to {signature}"
RESOLVED_BY_LINE = "Resolved overloaded {source} at line {line} to {signature}"
RESOLVED_FALLBACK = (
    "No line match for overloaded {source} at line {line}; "
    "attributing to all {count} candidates"
)

# (H) Index logs
RECORDED_TARGET = "Recorded {kind} target {target} for {signature}"
INDEX_BUILT = "Built reflection index: {call_sites} call sites, {pairs} targets"

# (H) Timing logs
FUNC_TIMING = "{func} took {time:.2f} ms"
