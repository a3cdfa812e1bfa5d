import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from c2cs import logging as c2cs_logging, utils

from .c_type import CodeLocation, CType
from .enum_info import CEnum, CEnumValue
from .function_info import (CCallingConvention, CFunctionExtern,
                            CFunctionExternParameter, CFunctionPointer)
from .record_info import CRecord, CRecordField
from .type_info import CAliasType, COpaqueDataType, COpaquePointer

logger = c2cs_logging.get_logger(__name__)


class ModelValidationError(ValueError):
    pass


@dataclass(frozen=True)
class CAbstractSyntaxTree:
    """Everything the front end extracted from one header, in declaration order."""

    function_externs: tuple[CFunctionExtern, ...] = ()
    function_pointers: tuple[CFunctionPointer, ...] = ()
    records: tuple[CRecord, ...] = ()
    opaque_pointers: tuple[COpaquePointer, ...] = ()
    opaque_data_types: tuple[COpaqueDataType, ...] = ()
    alias_types: tuple[CAliasType, ...] = ()
    enums: tuple[CEnum, ...] = ()

    def __len__(self):
        return (
            len(self.function_externs)
            + len(self.function_pointers)
            + len(self.records)
            + len(self.opaque_pointers)
            + len(self.opaque_data_types)
            + len(self.alias_types)
            + len(self.enums)
        )


@lru_cache(maxsize=1)
def _get_validator() -> Draft202012Validator:
    schema = json.loads(utils.load_model_schema_text())
    return Draft202012Validator(schema)


def validate_model(data: Any) -> None:
    error = best_match(_get_validator().iter_errors(data))
    if error is not None:
        path = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise ModelValidationError(f"invalid C model at {path}: {error.message}")


def _location(data: dict) -> CodeLocation:
    return CodeLocation(
        kind=data["kind"],
        file_name=data["file_name"],
        line=data["line"],
        date_time=data.get("date_time", ""),
    )


def _type(data: dict) -> CType:
    return CType(
        name=data["name"],
        original_name=data.get("original_name", data["name"]),
        size_of=data["size_of"],
        align_of=data["align_of"],
        array_size=data.get("array_size"),
        is_system_type=data.get("is_system_type", False),
    )


def _function_extern(data: dict) -> CFunctionExtern:
    parameters = tuple(
        CFunctionExternParameter(
            name=param["name"],
            location=_location(param["location"]),
            type=_type(param["type"]),
            is_read_only=param.get("is_read_only", False),
        )
        for param in data.get("parameters", [])
    )
    return CFunctionExtern(
        name=data["name"],
        location=_location(data["location"]),
        calling_convention=CCallingConvention(data["calling_convention"]),
        return_type=_type(data["return_type"]),
        parameters=parameters,
    )


def _record(data: dict) -> CRecord:
    fields = tuple(
        CRecordField(
            name=field["name"],
            location=_location(field["location"]),
            type=_type(field["type"]),
            offset=field["offset"],
            padding=field["padding"],
        )
        for field in data.get("fields", [])
    )
    return CRecord(
        name=data["name"],
        location=_location(data["location"]),
        type=_type(data["type"]),
        fields=fields,
        nested_records=tuple(_record(nested) for nested in data.get("nested_records", [])),
    )


def _enum(data: dict) -> CEnum:
    values = tuple(
        CEnumValue(
            name=value["name"],
            location=_location(value["location"]),
            value=value["value"],
        )
        for value in data.get("values", [])
    )
    return CEnum(
        name=data["name"],
        location=_location(data["location"]),
        integer_type=_type(data["integer_type"]),
        values=values,
    )


def abstract_syntax_tree_from_dict(data: dict) -> CAbstractSyntaxTree:
    """Build the C model from its JSON form, validating it first."""
    validate_model(data)

    return CAbstractSyntaxTree(
        function_externs=tuple(_function_extern(x) for x in data.get("function_externs", [])),
        function_pointers=tuple(
            CFunctionPointer(name=x["name"], location=_location(x["location"]), type=_type(x["type"]))
            for x in data.get("function_pointers", [])
        ),
        records=tuple(_record(x) for x in data.get("records", [])),
        opaque_pointers=tuple(
            COpaquePointer(name=x["name"], location=_location(x["location"]), pointer_type=_type(x["pointer_type"]))
            for x in data.get("opaque_pointers", [])
        ),
        opaque_data_types=tuple(
            COpaqueDataType(name=x["name"], location=_location(x["location"]))
            for x in data.get("opaque_data_types", [])
        ),
        alias_types=tuple(
            CAliasType(name=x["name"], location=_location(x["location"]), underlying_type=_type(x["underlying_type"]))
            for x in data.get("alias_types", [])
        ),
        enums=tuple(_enum(x) for x in data.get("enums", [])),
    )


def load_abstract_syntax_tree(path) -> CAbstractSyntaxTree:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Could not find C model file {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ModelValidationError(f"{path} is not valid JSON: {exc}") from exc

    tree = abstract_syntax_tree_from_dict(data)
    logger.debug("Loaded %d declarations from %s", len(tree), path)
    return tree
