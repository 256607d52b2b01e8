from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from . import constants as cs
from . import exceptions as ex
from . import logs as ls
from .models import TraceRecord


def parse_kind(token: str) -> cs.OperationKind | None:
    match token:
        case cs.OperationKind.CLASS_FOR_NAME:
            return cs.OperationKind.CLASS_FOR_NAME
        case cs.OperationKind.CLASS_NEW_INSTANCE:
            return cs.OperationKind.CLASS_NEW_INSTANCE
        case cs.OperationKind.CONSTRUCTOR_NEW_INSTANCE:
            return cs.OperationKind.CONSTRUCTOR_NEW_INSTANCE
        case cs.OperationKind.METHOD_INVOKE:
            return cs.OperationKind.METHOD_INVOKE
        case _:
            return None


def split_source(source: str) -> tuple[str, str] | None:
    class_name, sep, method_name = source.rpartition(cs.SEPARATOR_DOT)
    if not sep or not class_name or not method_name:
        return None
    return class_name, method_name


def parse_line_number(value: str) -> int | None:
    if not value:
        return cs.UNKNOWN_LINE
    if not (value.isascii() and value.isdecimal()):
        return None
    return int(value)


class TraceFileParser:
    """Streams ``kind;target;source;line`` records out of a reflection trace."""

    def __init__(
        self, file_path: str | Path, encoding: str = cs.ENCODING_UTF8
    ) -> None:
        self.file_path = Path(file_path)
        self.encoding = encoding

    def _malformed(self, line_no: int, reason: str) -> ex.MalformedRecordError:
        return ex.MalformedRecordError(self.file_path, line_no, reason)

    def parse_line(self, line: str, line_no: int) -> TraceRecord:
        fields = line.split(cs.TRACE_FIELD_SEPARATOR)
        if len(fields) != cs.TRACE_FIELD_COUNT:
            reason = ex.FIELD_COUNT.format(
                expected=cs.TRACE_FIELD_COUNT, found=len(fields)
            )
            raise self._malformed(line_no, reason)
        kind_token, target, source, line_token = fields

        kind = parse_kind(kind_token)
        if kind is None:
            raise self._malformed(line_no, ex.UNKNOWN_KIND.format(kind=kind_token))
        if not target:
            raise self._malformed(line_no, ex.EMPTY_TARGET)

        source_parts = split_source(source)
        if source_parts is None:
            raise self._malformed(line_no, ex.BAD_SOURCE.format(source=source))

        line_number = parse_line_number(line_token.strip())
        if line_number is None:
            raise self._malformed(line_no, ex.BAD_LINE_NUMBER.format(value=line_token))

        source_class, source_method_name = source_parts
        return TraceRecord(
            kind=kind,
            target=target,
            source_class=source_class,
            source_method_name=source_method_name,
            line=line_number,
            line_no=line_no,
        )

    def iter_records(self) -> Iterator[TraceRecord]:
        logger.info(ls.READING_TRACE.format(path=self.file_path))
        count = 0
        try:
            with open(self.file_path, encoding=self.encoding, newline="") as f:
                for line_no, raw_line in enumerate(f, start=1):
                    line = raw_line.rstrip("\r\n")
                    if not line:
                        logger.trace(ls.SKIPPED_BLANK.format(line_no=line_no))
                        continue
                    record = self.parse_line(line, line_no)
                    logger.debug(
                        ls.PARSED_RECORD.format(
                            kind=record.kind,
                            line_no=line_no,
                            target=record.target,
                            source=record.source,
                        )
                    )
                    count += 1
                    yield record
        except FileNotFoundError as e:
            raise ex.TraceFileNotFoundError(self.file_path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ex.TraceFileIOError(self.file_path, e) from e

        logger.info(ls.TRACE_EXHAUSTED.format(records=count, path=self.file_path))

    def __iter__(self) -> Iterator[TraceRecord]:
        return self.iter_records()


def parse_trace_file(
    file_path: str | Path, encoding: str = cs.ENCODING_UTF8
) -> list[TraceRecord]:
    return list(TraceFileParser(file_path, encoding))
