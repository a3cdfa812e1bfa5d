from .c_type import CodeLocation, CType
from .enum_info import CEnum, CEnumValue
from .function_info import (CCallingConvention, CFunctionExtern,
                            CFunctionExternParameter, CFunctionPointer)
from .record_info import CRecord, CRecordField
from .syntax_tree import (CAbstractSyntaxTree, ModelValidationError,
                          abstract_syntax_tree_from_dict,
                          load_abstract_syntax_tree)
from .type_info import CAliasType, COpaqueDataType, COpaquePointer

__all__ = [
    'CodeLocation',
    'CType',
    'CCallingConvention',
    'CFunctionExtern',
    'CFunctionExternParameter',
    'CFunctionPointer',
    'CRecord',
    'CRecordField',
    'COpaquePointer',
    'COpaqueDataType',
    'CAliasType',
    'CEnum',
    'CEnumValue',
    'CAbstractSyntaxTree',
    'ModelValidationError',
    'abstract_syntax_tree_from_dict',
    'load_abstract_syntax_tree',
]
