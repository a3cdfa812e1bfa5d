from dataclasses import dataclass, field
from typing import AbstractSet, Mapping, Optional

from c2cs.c_model import CodeLocation
from c2cs.data_types import DeclarationKind

from .binding_types import CSharpAbstractSyntaxTree
from .identifiers import CSHARP_RESERVED_WORDS
from .type_mapper import CSHARP_BOOLEAN_TYPE_NAME, FIXED_BUFFER_TYPES


class MappingError(Exception):
    def __init__(self, message: str, name: str, location: Optional[CodeLocation] = None):
        super().__init__(message)
        self.name = name
        self.location = location

    def __str__(self):
        text = super().__str__()
        if self.location is not None:
            return f"{text} ({self.location.file_name}:{self.location.line})"
        return text


class UnmappedCallingConventionError(MappingError):
    pass


class LayoutMismatchError(MappingError):
    pass


@dataclass(frozen=True)
class MapperOptions:
    reserved_words: AbstractSet[str] = CSHARP_RESERVED_WORDS
    fixed_buffer_types: Mapping[str, str] = field(default_factory=lambda: FIXED_BUFFER_TYPES)
    boolean_type_name: str = CSHARP_BOOLEAN_TYPE_NAME
    validate_layout: bool = False
    max_workers: int = 1

    @classmethod
    def from_config(cls, config: dict) -> "MapperOptions":
        mapping_cfg = config.get("mapping", {}) if config else {}
        return cls(
            boolean_type_name=mapping_cfg.get("boolean_type_name", CSHARP_BOOLEAN_TYPE_NAME),
            validate_layout=bool(mapping_cfg.get("validate_layout", False)),
            max_workers=max(1, int(mapping_cfg.get("max_workers", 1))),
        )


@dataclass(frozen=True)
class MappingFailure:
    kind: DeclarationKind
    name: str
    location: Optional[CodeLocation]
    error: MappingError

    def __str__(self):
        return f"{self.kind.value} {self.name}: {self.error}"


@dataclass(frozen=True)
class MappingResult:
    tree: CSharpAbstractSyntaxTree
    failures: tuple[MappingFailure, ...] = ()

    @property
    def any_failed(self) -> bool:
        return bool(self.failures)
