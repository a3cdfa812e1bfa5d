"""Lower the C declaration model into the C# binding model.

Every top-level declaration is mapped on its own: the only mutable state is
the list of parameter names already handed out while mapping a single
function. That makes the per-declaration work safe to run on a thread pool as
long as the results are put back in input order.
"""

import concurrent.futures
from typing import Callable, Optional

from c2cs import logging as c2cs_logging
from c2cs.c_model import (CAbstractSyntaxTree, CAliasType, CCallingConvention,
                          CEnum, CEnumValue, CFunctionExtern,
                          CFunctionExternParameter, CFunctionPointer,
                          CodeLocation, COpaqueDataType, COpaquePointer,
                          CRecord, CRecordField, CType)
from c2cs.data_types import DeclarationKind

from .binding_types import (CSharpAbstractSyntaxTree, CSharpCallingConvention,
                            CSharpEnum, CSharpEnumValue, CSharpFunctionExtern,
                            CSharpFunctionExternParameter,
                            CSharpFunctionPointer, CSharpOpaqueDataType,
                            CSharpStruct, CSharpStructField, CSharpType)
from .identifiers import sanitize_identifier, unique_parameter_name
from .mapper_types import (LayoutMismatchError, MapperOptions, MappingError,
                           MappingFailure, MappingResult,
                           UnmappedCallingConventionError)
from .type_mapper import is_valid_fixed_buffer_type, map_type

logger = c2cs_logging.get_logger(__name__)

OPAQUE_POINTER_FIELD_NAME = "Pointer"
ALIAS_FIELD_NAME = "Data"

# declaration kind -> binding tree bucket
_BUCKETS = {
    DeclarationKind.FUNCTION_EXTERN: "function_externs",
    DeclarationKind.FUNCTION_POINTER: "function_pointers",
    DeclarationKind.RECORD: "structs",
    DeclarationKind.ALIAS_TYPE: "structs",
    DeclarationKind.OPAQUE_POINTER: "structs",
    DeclarationKind.OPAQUE_DATA_TYPE: "opaque_data_types",
    DeclarationKind.ENUM: "enums",
}


def _location_comment(location: Optional[CodeLocation]) -> str:
    if location is None:
        return ""
    return location.as_comment()


class CSharpMapper:
    def __init__(self, options: Optional[MapperOptions] = None):
        self.options = options if options is not None else MapperOptions()

    def map(self, tree: CAbstractSyntaxTree) -> MappingResult:
        jobs: list[tuple[DeclarationKind, object, Callable]] = []
        jobs.extend((DeclarationKind.FUNCTION_EXTERN, x, self.map_function_extern) for x in tree.function_externs)
        jobs.extend((DeclarationKind.FUNCTION_POINTER, x, self.map_function_pointer) for x in tree.function_pointers)
        jobs.extend((DeclarationKind.RECORD, x, self.map_struct) for x in tree.records)
        jobs.extend((DeclarationKind.ALIAS_TYPE, x, self.map_alias_type) for x in tree.alias_types)
        jobs.extend((DeclarationKind.OPAQUE_POINTER, x, self.map_opaque_pointer) for x in tree.opaque_pointers)
        jobs.extend((DeclarationKind.OPAQUE_DATA_TYPE, x, self.map_opaque_data_type) for x in tree.opaque_data_types)
        jobs.extend((DeclarationKind.ENUM, x, self.map_enum) for x in tree.enums)

        if self.options.max_workers > 1 and len(jobs) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.options.max_workers) as pool:
                # map() yields in submission order
                outcomes = list(pool.map(self._map_one, jobs))
        else:
            outcomes = [self._map_one(job) for job in jobs]

        buckets: dict[str, list] = {bucket: [] for bucket in set(_BUCKETS.values())}
        failures: list[MappingFailure] = []
        for kind, mapped, failure in outcomes:
            if failure is not None:
                failures.append(failure)
                continue
            buckets[_BUCKETS[kind]].append(mapped)

        result_tree = CSharpAbstractSyntaxTree(
            function_externs=tuple(buckets["function_externs"]),
            function_pointers=tuple(buckets["function_pointers"]),
            structs=tuple(buckets["structs"]),
            opaque_data_types=tuple(buckets["opaque_data_types"]),
            enums=tuple(buckets["enums"]),
        )
        logger.debug("Mapped %d declarations, %d failed", len(jobs) - len(failures), len(failures))
        return MappingResult(tree=result_tree, failures=tuple(failures))

    def _map_one(self, job):
        kind, declaration, map_fn = job
        try:
            return kind, map_fn(declaration), None
        except MappingError as exc:
            logger.debug("Failed to map %s %s: %s", kind.value, exc.name, exc)
            failure = MappingFailure(
                kind=kind,
                name=declaration.name,
                location=declaration.location,
                error=exc,
            )
            return kind, None, failure

    def map_type(self, c_type: CType) -> CSharpType:
        return map_type(c_type, self.options.boolean_type_name)

    ######## Functions ########
    def map_function_extern(self, function: CFunctionExtern) -> CSharpFunctionExtern:
        calling_convention = self.map_calling_convention(function)
        return CSharpFunctionExtern(
            name=sanitize_identifier(function.name, self.options.reserved_words),
            original_name=function.name,
            location_comment=_location_comment(function.location),
            calling_convention=calling_convention,
            return_type=self.map_type(function.return_type),
            parameters=self.map_function_extern_parameters(function.parameters),
        )

    def map_calling_convention(self, function: CFunctionExtern) -> CSharpCallingConvention:
        match function.calling_convention:
            case CCallingConvention.C:
                return CSharpCallingConvention.C
            case CCallingConvention.UNKNOWN:
                return CSharpCallingConvention.UNKNOWN
            case other:
                raise UnmappedCallingConventionError(
                    f"unsupported calling convention {other!r} for function {function.name}",
                    function.name,
                    function.location,
                )

    def map_function_extern_parameters(
        self, parameters: tuple[CFunctionExternParameter, ...]
    ) -> tuple[CSharpFunctionExternParameter, ...]:
        already_used: list[str] = []
        mapped = []
        for parameter in parameters:
            name = unique_parameter_name(parameter.name, already_used)
            mapped.append(CSharpFunctionExternParameter(
                name=sanitize_identifier(name, self.options.reserved_words),
                location_comment=_location_comment(parameter.location),
                type=self.map_type(parameter.type),
                is_read_only=parameter.is_read_only,
            ))
        return tuple(mapped)

    def map_function_pointer(self, function_pointer: CFunctionPointer) -> CSharpFunctionPointer:
        return CSharpFunctionPointer(
            name=function_pointer.name,
            location_comment=_location_comment(function_pointer.location),
            type=self.map_type(function_pointer.type),
        )

    ######## Structs ########
    def map_struct(self, record: CRecord) -> CSharpStruct:
        if self.options.validate_layout:
            self._validate_record_layout(record)

        return CSharpStruct(
            name=record.name,
            location_comment=_location_comment(record.location),
            type=self.map_type(record.type),
            fields=tuple(self.map_struct_field(x) for x in record.fields),
            nested_structs=tuple(self.map_struct(x) for x in record.nested_records),
        )

    def map_struct_field(self, field: CRecordField) -> CSharpStructField:
        cs_type = self.map_type(field.type)
        is_wrapped = cs_type.is_array and not is_valid_fixed_buffer_type(
            cs_type.name, self.options.fixed_buffer_types)
        return CSharpStructField(
            name=sanitize_identifier(field.name, self.options.reserved_words),
            original_name=field.name,
            location_comment=_location_comment(field.location),
            type=cs_type,
            offset=field.offset,
            padding=field.padding,
            is_wrapped=is_wrapped,
        )

    def _validate_record_layout(self, record: CRecord) -> None:
        offsets = [f.offset for f in record.fields]
        # unions and bit-field overlays share offsets; the sum rule only holds for sequential layouts
        if not offsets or any(b <= a for a, b in zip(offsets, offsets[1:])):
            return
        total = sum(f.type.size_of + f.padding for f in record.fields)
        if total != record.type.size_of:
            raise LayoutMismatchError(
                f"fields of {record.name} cover {total} bytes but the record is {record.type.size_of} bytes",
                record.name,
                record.location,
            )

    def _single_field_struct(self, name: str, location: CodeLocation, field_name: str, c_type: CType) -> CSharpStruct:
        comment = _location_comment(location)
        cs_type = self.map_type(c_type)
        field = CSharpStructField(
            name=field_name,
            original_name="",
            location_comment=comment,
            type=cs_type,
            offset=0,
            padding=0,
            is_wrapped=False,
        )
        return CSharpStruct(
            name=name,
            location_comment=comment,
            type=cs_type,
            fields=(field,),
        )

    def map_opaque_pointer(self, opaque_pointer: COpaquePointer) -> CSharpStruct:
        return self._single_field_struct(
            opaque_pointer.name,
            opaque_pointer.location,
            OPAQUE_POINTER_FIELD_NAME,
            opaque_pointer.pointer_type,
        )

    def map_alias_type(self, alias_type: CAliasType) -> CSharpStruct:
        # a wrapper struct keeps two typedefs of the same primitive apart
        return self._single_field_struct(
            alias_type.name,
            alias_type.location,
            ALIAS_FIELD_NAME,
            alias_type.underlying_type,
        )

    def map_opaque_data_type(self, opaque_data_type: COpaqueDataType) -> CSharpOpaqueDataType:
        return CSharpOpaqueDataType(
            name=opaque_data_type.name,
            location_comment=_location_comment(opaque_data_type.location),
        )

    ######## Enums ########
    def map_enum(self, enum: CEnum) -> CSharpEnum:
        return CSharpEnum(
            name=enum.name,
            location_comment=_location_comment(enum.location),
            integer_type=self.map_type(enum.integer_type),
            values=tuple(self.map_enum_value(x) for x in enum.values),
        )

    def map_enum_value(self, value: CEnumValue) -> CSharpEnumValue:
        return CSharpEnumValue(
            name=value.name,
            location_comment=_location_comment(value.location),
            value=value.value,
        )


def map_abstract_syntax_tree(tree: CAbstractSyntaxTree, options: Optional[MapperOptions] = None) -> MappingResult:
    return CSharpMapper(options).map(tree)
