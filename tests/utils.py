import pytest

from c2cs.c_model import (CAbstractSyntaxTree, CAliasType, CCallingConvention,
                          CEnum, CEnumValue, CFunctionExtern,
                          CFunctionExternParameter, CFunctionPointer,
                          CodeLocation, COpaqueDataType, COpaquePointer,
                          CRecord, CRecordField, CType)
from c2cs.utils import load_default_config


def loc(kind="Test", line=1, file_name="sample.h", date_time=""):
    return CodeLocation(kind=kind, file_name=file_name, line=line, date_time=date_time)


def primitive(name, size, align=None, array_size=None):
    return CType(
        name=name,
        original_name=name,
        size_of=size,
        align_of=size if align is None else align,
        array_size=array_size,
        is_system_type=True,
    )


INT32 = primitive("int", 4)
UINT8 = primitive("byte", 1)
BOOL = primitive("bool", 1)
VOID = primitive("void", 0, align=0)
VOID_PTR = primitive("void*", 8)


def user_type(name, size, align, array_size=None):
    return CType(
        name=name,
        original_name=name,
        size_of=size,
        align_of=align,
        array_size=array_size,
        is_system_type=False,
    )


def param(name, c_type=INT32, is_read_only=False):
    return CFunctionExternParameter(name=name, location=loc("Parameter"), type=c_type, is_read_only=is_read_only)


def function(name, *params, return_type=VOID, calling_convention=CCallingConvention.C):
    return CFunctionExtern(
        name=name,
        location=loc("Function"),
        calling_convention=calling_convention,
        return_type=return_type,
        parameters=tuple(params),
    )


def field(name, c_type, offset, padding=0):
    return CRecordField(name=name, location=loc("Field"), type=c_type, offset=offset, padding=padding)


def record(name, size, align, *fields, nested=()):
    return CRecord(
        name=name,
        location=loc("Struct"),
        type=user_type(name, size, align),
        fields=tuple(fields),
        nested_records=tuple(nested),
    )


def sample_tree():
    point = record(
        "Point", 8, 4,
        field("x", INT32, 0),
        field("y", INT32, 4),
    )
    shape = record(
        "Shape", 40, 8,
        field("kind", UINT8, 0, padding=3),
        field("flags", primitive("int", 8, align=4, array_size=2), 4, padding=4),
        field("points", user_type("Point", 16, 4, array_size=2), 16),
        field("data", VOID_PTR, 32),
    )
    return CAbstractSyntaxTree(
        function_externs=(
            function("shape_area", param("shape", user_type("Shape*", 8, 8), is_read_only=True),
                     return_type=primitive("double", 8)),
            function("shape_is_empty", param("shape", user_type("Shape*", 8, 8)), return_type=BOOL),
        ),
        function_pointers=(
            CFunctionPointer(name="ShapeVisitor", location=loc("FunctionPointer"),
                             type=user_type("delegate* unmanaged<Shape*, void>", 8, 8)),
        ),
        records=(point, shape),
        opaque_pointers=(
            COpaquePointer(name="ShapeHandle", location=loc("OpaquePointer"), pointer_type=VOID_PTR),
        ),
        opaque_data_types=(
            COpaqueDataType(name="Canvas", location=loc("OpaqueDataType")),
        ),
        alias_types=(
            CAliasType(name="ShapeId", location=loc("AliasType"), underlying_type=INT32),
        ),
        enums=(
            CEnum(
                name="ShapeKind",
                location=loc("Enum"),
                integer_type=INT32,
                values=(
                    CEnumValue(name="SHAPE_NONE", location=loc("EnumValue"), value=-1),
                    CEnumValue(name="SHAPE_CIRCLE", location=loc("EnumValue"), value=0),
                    CEnumValue(name="SHAPE_POLYGON", location=loc("EnumValue"), value=4096),
                ),
            ),
        ),
    )


@pytest.fixture
def config():
    return load_default_config()
