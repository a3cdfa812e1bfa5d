from .binding_types import (CSharpAbstractSyntaxTree, CSharpCallingConvention,
                            CSharpEnum, CSharpEnumValue, CSharpFunctionExtern,
                            CSharpFunctionExternParameter,
                            CSharpFunctionPointer, CSharpOpaqueDataType,
                            CSharpStruct, CSharpStructField, CSharpType)
from .code_generator import CodeGenerator, EmitResult
from .identifiers import sanitize_identifier, unique_parameter_name
from .mapper import CSharpMapper, map_abstract_syntax_tree
from .mapper_types import (LayoutMismatchError, MapperOptions, MappingError,
                           MappingFailure, MappingResult,
                           UnmappedCallingConventionError)
from .type_mapper import is_valid_fixed_buffer_type, map_type

__all__ = [
    'CSharpAbstractSyntaxTree',
    'CSharpCallingConvention',
    'CSharpEnum',
    'CSharpEnumValue',
    'CSharpFunctionExtern',
    'CSharpFunctionExternParameter',
    'CSharpFunctionPointer',
    'CSharpOpaqueDataType',
    'CSharpStruct',
    'CSharpStructField',
    'CSharpType',
    'CodeGenerator',
    'EmitResult',
    'CSharpMapper',
    'map_abstract_syntax_tree',
    'MapperOptions',
    'MappingError',
    'MappingFailure',
    'MappingResult',
    'UnmappedCallingConventionError',
    'LayoutMismatchError',
    'sanitize_identifier',
    'unique_parameter_name',
    'is_valid_fixed_buffer_type',
    'map_type',
]
