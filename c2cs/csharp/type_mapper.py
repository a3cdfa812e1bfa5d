"""C type descriptors to C# type descriptors."""

from types import MappingProxyType
from typing import Mapping, Optional

from c2cs.c_model import CType

from .binding_types import CSharpType

# A one-byte marshalable boolean; the managed `bool` is not guaranteed to
# match C's `_Bool` across the interop boundary.
CSHARP_BOOLEAN_TYPE_NAME = "CBool"

C_BOOLEAN_TYPE_NAMES = frozenset({"bool", "_Bool"})


def _fixed_buffer_table() -> Mapping[str, str]:
    # canonical C# keyword -> spellings the front end may hand us
    spellings = {
        "bool": ("Boolean",),
        "byte": ("uint8", "u8", "Byte"),
        "sbyte": ("int8", "i8", "SByte"),
        "char": ("Char",),
        "short": ("int16", "i16", "Int16"),
        "ushort": ("uint16", "u16", "UInt16"),
        "int": ("int32", "i32", "Int32"),
        "uint": ("uint32", "u32", "UInt32"),
        "long": ("int64", "i64", "Int64"),
        "ulong": ("uint64", "u64", "UInt64"),
        "float": ("float32", "f32", "Single"),
        "double": ("float64", "f64", "Double"),
    }
    table = {}
    for keyword, aliases in spellings.items():
        table[keyword] = keyword
        for alias in aliases:
            table[alias] = keyword
            if alias[0].isupper():
                table[f"System.{alias}"] = keyword
    return MappingProxyType(table)


# Element types C# accepts in a `fixed` buffer. Anything else is wrapped.
FIXED_BUFFER_TYPES: Mapping[str, str] = _fixed_buffer_table()


def map_type_name(c_type: CType, boolean_type_name: str = CSHARP_BOOLEAN_TYPE_NAME) -> str:
    if c_type.is_system_type and c_type.name in C_BOOLEAN_TYPE_NAMES:
        return boolean_type_name
    return c_type.name


def map_type(c_type: CType, boolean_type_name: str = CSHARP_BOOLEAN_TYPE_NAME) -> CSharpType:
    return CSharpType(
        name=map_type_name(c_type, boolean_type_name),
        original_name=c_type.original_name,
        size_of=c_type.size_of,
        align_of=c_type.align_of,
        fixed_buffer_size=c_type.array_size,
    )


def fixed_buffer_element_type(type_name: str, fixed_buffer_types: Mapping[str, str] = FIXED_BUFFER_TYPES) -> Optional[str]:
    """Return the C# keyword to use in a `fixed` declaration, or None."""
    return fixed_buffer_types.get(type_name.strip())


def is_valid_fixed_buffer_type(type_name: str, fixed_buffer_types: Mapping[str, str] = FIXED_BUFFER_TYPES) -> bool:
    return fixed_buffer_element_type(type_name, fixed_buffer_types) is not None
