from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CSharpCallingConvention(Enum):
    C = "C"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class CSharpType:
    name: str
    original_name: str
    size_of: int
    align_of: int
    fixed_buffer_size: Optional[int] = None

    @property
    def is_array(self) -> bool:
        return self.fixed_buffer_size is not None


@dataclass(frozen=True)
class CSharpFunctionExternParameter:
    name: str
    location_comment: str
    type: CSharpType
    is_read_only: bool


@dataclass(frozen=True)
class CSharpFunctionExtern:
    name: str
    original_name: str
    location_comment: str
    calling_convention: CSharpCallingConvention
    return_type: CSharpType
    parameters: tuple[CSharpFunctionExternParameter, ...] = ()


@dataclass(frozen=True)
class CSharpFunctionPointer:
    name: str
    location_comment: str
    type: CSharpType


@dataclass(frozen=True)
class CSharpStructField:
    name: str
    original_name: str
    location_comment: str
    type: CSharpType
    offset: int
    padding: int
    # array fields whose element type cannot be a C# fixed buffer
    is_wrapped: bool


@dataclass(frozen=True)
class CSharpStruct:
    name: str
    location_comment: str
    type: CSharpType
    fields: tuple[CSharpStructField, ...] = ()
    nested_structs: tuple["CSharpStruct", ...] = ()


@dataclass(frozen=True)
class CSharpOpaqueDataType:
    name: str
    location_comment: str


@dataclass(frozen=True)
class CSharpEnumValue:
    name: str
    location_comment: str
    value: int


@dataclass(frozen=True)
class CSharpEnum:
    name: str
    location_comment: str
    integer_type: CSharpType
    values: tuple[CSharpEnumValue, ...] = ()


@dataclass(frozen=True)
class CSharpAbstractSyntaxTree:
    function_externs: tuple[CSharpFunctionExtern, ...] = ()
    function_pointers: tuple[CSharpFunctionPointer, ...] = ()
    structs: tuple[CSharpStruct, ...] = ()
    opaque_data_types: tuple[CSharpOpaqueDataType, ...] = ()
    enums: tuple[CSharpEnum, ...] = ()
