from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from c2cs import logging as c2cs_logging

from . import normalizer
from .binding_types import (CSharpAbstractSyntaxTree, CSharpCallingConvention,
                            CSharpEnum, CSharpFunctionExtern,
                            CSharpFunctionExternParameter,
                            CSharpFunctionPointer, CSharpOpaqueDataType,
                            CSharpStruct, CSharpStructField, CSharpType)
from .type_mapper import FIXED_BUFFER_TYPES, fixed_buffer_element_type

logger = c2cs_logging.get_logger(__name__)

_TEMPLATE_DIR = Path(__file__).with_name("templates")

DEFAULT_USINGS = ("System", "System.Runtime.InteropServices", "C2CS")

# binding calling convention -> System.Runtime.InteropServices.CallingConvention member
_CALLING_CONVENTIONS = {
    CSharpCallingConvention.C: "Cdecl",
    CSharpCallingConvention.UNKNOWN: "Winapi",
}


@lru_cache(maxsize=None)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, **args: Any) -> str:
    template = _get_env().get_template(template_name)
    return template.render(**args)


def wrapper_struct_name(field: CSharpStructField) -> str:
    base = field.original_name or field.name.lstrip("@")
    return f"_{base}_FixedBuffer"


@dataclass(frozen=True)
class EmitResult:
    source: str
    declared_names: tuple[str, ...]


class CodeGenerator:
    """Render a C# binding tree as one compilation unit."""

    def __init__(
        self,
        library_name: str,
        class_name: Optional[str] = None,
        namespace: Optional[str] = None,
        usings: Sequence[str] = DEFAULT_USINGS,
        fixed_buffer_types: Mapping[str, str] = FIXED_BUFFER_TYPES,
    ):
        if not library_name:
            raise ValueError("library_name must not be empty")
        self.library_name = library_name
        self.class_name = class_name or library_name
        self.namespace = namespace or None
        self.usings = tuple(usings)
        self.fixed_buffer_types = fixed_buffer_types

    def generate(self, tree: CSharpAbstractSyntaxTree) -> EmitResult:
        blocks: list[str] = []
        declared_names: list[str] = []

        for function in tree.function_externs:
            blocks.append(self.render_function_extern(function))
            declared_names.append(function.name)
        for function_pointer in tree.function_pointers:
            blocks.append(self.render_function_pointer(function_pointer))
            declared_names.append(function_pointer.name)
        for struct in tree.structs:
            blocks.append(self.render_struct(struct))
            declared_names.append(struct.name)
        for opaque_data_type in tree.opaque_data_types:
            blocks.append(self.render_opaque_data_type(opaque_data_type))
            declared_names.append(opaque_data_type.name)
        for enum in tree.enums:
            blocks.append(self.render_enum(enum))
            declared_names.append(enum.name)

        class_text = _render(
            "class.cs.j2",
            class_name=self.class_name,
            library_name=self.library_name,
            body=normalizer.join_members(blocks),
        )
        source = _render(
            "file.cs.j2",
            library_name=self.library_name,
            namespace=self.namespace,
            usings=self.usings,
            class_text=class_text,
        )
        logger.debug("Rendered %d declarations for %s", len(declared_names), self.class_name)
        return EmitResult(source=normalizer.normalize_whitespace(source), declared_names=tuple(declared_names))

    ######## Functions ########
    def render_function_extern(self, function: CSharpFunctionExtern) -> str:
        return _render(
            "function_extern.cs.j2",
            location_comment=function.location_comment,
            entry_point=function.original_name,
            calling_convention=_CALLING_CONVENTIONS[function.calling_convention],
            return_declaration=normalizer.declaration(function.return_type.name, function.name),
            parameters=[self.render_parameter(x) for x in function.parameters],
        )

    def render_parameter(self, parameter: CSharpFunctionExternParameter) -> str:
        text = normalizer.declaration(parameter.type.name, parameter.name)
        if parameter.is_read_only:
            return f"[In] {text}"
        return text

    def render_function_pointer(self, function_pointer: CSharpFunctionPointer) -> str:
        pointer_field = CSharpStructField(
            name="Pointer",
            original_name="",
            location_comment="",
            type=function_pointer.type,
            offset=0,
            padding=0,
            is_wrapped=False,
        )
        return self._render_struct_text(
            function_pointer.name,
            function_pointer.location_comment,
            function_pointer.type,
            [self.render_struct_field(pointer_field)],
        )

    ######## Structs ########
    def render_struct(self, struct: CSharpStruct) -> str:
        members = [self.render_struct_field(x) for x in struct.fields]
        members.extend(self.render_wrapper_struct(x) for x in struct.fields if self.needs_wrapper(x))
        members.extend(self.render_struct(x) for x in struct.nested_structs)
        return self._render_struct_text(struct.name, struct.location_comment, struct.type, members)

    def _render_struct_text(self, name: str, location_comment: str, cs_type: CSharpType, members: list[str]) -> str:
        return _render(
            "struct.cs.j2",
            location_comment=location_comment,
            name=name,
            size=cs_type.size_of,
            pack=cs_type.align_of,
            body=normalizer.join_members(members),
        )

    def needs_wrapper(self, field: CSharpStructField) -> bool:
        """True for wrapped fields and for any array C# cannot declare as `fixed`.

        Synthesized fields (alias `Data`, opaque `Pointer`) are never marked
        wrapped, so an alias over an array of structs is caught here.
        """
        if field.is_wrapped:
            return True
        if not field.type.is_array:
            return False
        return fixed_buffer_element_type(field.type.name, self.fixed_buffer_types) is None

    def render_struct_field(self, field: CSharpStructField) -> str:
        cs_type = field.type
        if self.needs_wrapper(field):
            if not field.is_wrapped:
                logger.debug("Wrapping %s %s[%s]: not a fixed buffer element type",
                             cs_type.name, field.name, cs_type.fixed_buffer_size)
            declaration = normalizer.declaration(wrapper_struct_name(field), field.name)
        elif cs_type.is_array:
            element_type = fixed_buffer_element_type(cs_type.name, self.fixed_buffer_types)
            declaration = f"fixed {element_type} {field.name}[{cs_type.fixed_buffer_size}]"
        else:
            declaration = normalizer.declaration(cs_type.name, field.name)

        return _render(
            "struct_field.cs.j2",
            offset_attribute=normalizer.field_offset_attribute(field.offset, cs_type.size_of, field.padding),
            declaration=declaration,
        )

    def render_wrapper_struct(self, field: CSharpStructField) -> str:
        """Explicit-layout stand-in for an array C# cannot declare as `fixed`."""
        cs_type = field.type
        count = cs_type.fixed_buffer_size or 0
        element_size = cs_type.size_of // count if count else 0
        element_type = CSharpType(
            name=cs_type.name,
            original_name=cs_type.original_name,
            size_of=element_size,
            align_of=cs_type.align_of,
        )
        members = []
        for index in range(count):
            element = CSharpStructField(
                name=f"_{index}",
                original_name="",
                location_comment="",
                type=element_type,
                offset=index * element_size,
                padding=0,
                is_wrapped=False,
            )
            members.append(self.render_struct_field(element))
        return self._render_struct_text(wrapper_struct_name(field), "", cs_type, members)

    def render_opaque_data_type(self, opaque_data_type: CSharpOpaqueDataType) -> str:
        return _render(
            "opaque_data_type.cs.j2",
            location_comment=opaque_data_type.location_comment,
            name=opaque_data_type.name,
        )

    ######## Enums ########
    def render_enum(self, enum: CSharpEnum) -> str:
        return _render(
            "enum.cs.j2",
            location_comment=enum.location_comment,
            name=enum.name,
            integer_type=enum.integer_type.name,
            values=enum.values,
        )
