import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from . import constants as cs
from . import exceptions as ex
from . import logs as ls
from .models import ClassEntity, LineRange, MethodBody, MethodEntity, Statement
from .types_defs import (
    ClassData,
    ClassName,
    LineRangeData,
    MethodBodyData,
    MethodData,
    MethodSignature,
    ProgramModelData,
)


def _parse_line_bound(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(ex.BAD_LINE_BOUND.format(value=value))
    return value


def _parse_line_range(data: LineRangeData | None) -> LineRange | None:
    if data is None:
        return None
    return LineRange(
        start=_parse_line_bound(data[cs.KEY_START]),
        end=_parse_line_bound(data[cs.KEY_END]),
    )


def _parse_body(data: MethodBodyData | None) -> MethodBody | None:
    if data is None:
        return None
    statements = tuple(
        Statement(
            text=stmt_data.get(cs.KEY_TEXT, ""),
            line_range=_parse_line_range(stmt_data.get(cs.KEY_LINE_RANGE)),
        )
        for stmt_data in data.get(cs.KEY_STATEMENTS, [])
    )
    return MethodBody(
        line_range=_parse_line_range(data.get(cs.KEY_LINE_RANGE)),
        statements=statements,
    )


def _parse_method(class_name: ClassName, data: MethodData) -> MethodEntity:
    return MethodEntity(
        declaring_class=class_name,
        name=data[cs.KEY_NAME],
        return_type=data[cs.KEY_RETURN_TYPE],
        parameter_types=tuple(data.get(cs.KEY_PARAMETER_TYPES, [])),
        line_range=_parse_line_range(data.get(cs.KEY_LINE_RANGE)),
        body=_parse_body(data.get(cs.KEY_BODY)),
    )


def parse_class(data: ClassData) -> ClassEntity:
    class_name = data[cs.KEY_NAME]
    methods = tuple(
        _parse_method(class_name, method_data)
        for method_data in data.get(cs.KEY_METHODS, [])
    )
    return ClassEntity(name=class_name, methods=methods)


def _read_json(path: Path) -> object:
    if not path.exists():
        raise ex.ProgramModelError(ex.PROGRAM_MODEL_NOT_FOUND.format(path=path))
    try:
        with open(path, encoding=cs.ENCODING_UTF8) as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ex.ProgramModelError(
            ex.PROGRAM_MODEL_INVALID.format(path=path, error=e)
        ) from e


class JsonProgramModel:
    """Query-only program model backed by a JSON export.

    Classes missing from the export can be loaded on demand from a class path
    directory holding one ``<package>/<Class>.json`` file per class.
    """

    def __init__(
        self, classes: Iterable[ClassEntity] = (), class_path: Path | None = None
    ) -> None:
        self.class_path = class_path
        self._classes: dict[ClassName, ClassEntity] = {}
        self._methods_by_signature: dict[MethodSignature, MethodEntity] = {}
        for class_entity in classes:
            self._register(class_entity)

    def _register(self, class_entity: ClassEntity) -> None:
        if class_entity.name in self._classes:
            raise ex.ProgramModelError(
                ex.DUPLICATE_CLASS.format(class_name=class_entity.name)
            )
        seen: set[MethodSignature] = set()
        for method in class_entity.methods:
            signature = method.signature
            if signature in seen or signature in self._methods_by_signature:
                raise ex.ProgramModelError(
                    ex.DUPLICATE_METHOD.format(signature=signature)
                )
            seen.add(signature)
        self._classes[class_entity.name] = class_entity
        for method in class_entity.methods:
            self._methods_by_signature[method.signature] = method

    @classmethod
    def from_file(
        cls, file_path: str | Path, class_path: str | Path | None = None
    ) -> "JsonProgramModel":
        path = Path(file_path)
        logger.info(ls.LOADING_MODEL.format(path=path))
        data = _read_json(path)
        try:
            model_data: ProgramModelData = data  # type: ignore[assignment]
            classes = [parse_class(c) for c in model_data[cs.KEY_CLASSES]]
        except (KeyError, TypeError, ValueError) as e:
            raise ex.ProgramModelError(
                ex.PROGRAM_MODEL_INVALID.format(path=path, error=e)
            ) from e

        model = cls(classes, Path(class_path) if class_path else None)
        logger.info(
            ls.LOADED_MODEL.format(
                classes=len(model._classes), methods=len(model._methods_by_signature)
            )
        )
        return model

    @property
    def classes(self) -> list[ClassEntity]:
        return list(self._classes.values())

    def contains_class(self, class_name: ClassName) -> bool:
        return class_name in self._classes

    def get_class(self, class_name: ClassName) -> ClassEntity | None:
        return self._classes.get(class_name)

    def class_file_for(self, class_name: ClassName) -> Path | None:
        if self.class_path is None:
            return None
        parts = class_name.split(cs.SEPARATOR_DOT)
        return self.class_path.joinpath(*parts).with_suffix(cs.CLASS_FILE_EXT)

    def load_class_on_demand(self, class_name: ClassName) -> bool:
        if class_name in self._classes:
            return True
        logger.debug(ls.LOADING_CLASS_ON_DEMAND.format(class_name=class_name))

        class_file = self.class_file_for(class_name)
        if class_file is None or not class_file.is_file():
            logger.debug(
                ls.CLASS_FILE_MISSING.format(class_name=class_name, path=class_file)
            )
            return False

        data = _read_json(class_file)
        try:
            class_entity = parse_class(data)  # type: ignore[arg-type]
        except (KeyError, TypeError, ValueError) as e:
            raise ex.ProgramModelError(
                ex.PROGRAM_MODEL_INVALID.format(path=class_file, error=e)
            ) from e
        if class_entity.name != class_name:
            raise ex.ProgramModelError(
                ex.CLASS_FILE_MISMATCH.format(
                    path=class_file, found=class_entity.name, expected=class_name
                )
            )

        self._register(class_entity)
        logger.info(
            ls.LOADED_CLASS.format(
                class_name=class_name,
                methods=len(class_entity.methods),
                path=class_file,
            )
        )
        return True

    def resolve_class(self, class_name: ClassName) -> ClassEntity | None:
        if not self.load_class_on_demand(class_name):
            return None
        return self._classes[class_name]

    def contains_method(self, signature: MethodSignature) -> bool:
        return signature in self._methods_by_signature

    def get_method(self, signature: MethodSignature) -> MethodEntity | None:
        return self._methods_by_signature.get(signature)
