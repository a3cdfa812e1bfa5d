from enum import Enum


class DeclarationKind(Enum):
    FUNCTION_EXTERN = "FunctionExtern"
    FUNCTION_POINTER = "FunctionPointer"
    RECORD = "Record"
    OPAQUE_POINTER = "OpaquePointer"
    OPAQUE_DATA_TYPE = "OpaqueDataType"
    ALIAS_TYPE = "AliasType"
    ENUM = "Enum"
