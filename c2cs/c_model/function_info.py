from dataclasses import dataclass
from enum import Enum

from .c_type import CodeLocation, CType


class CCallingConvention(Enum):
    C = "C"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class CFunctionExternParameter:
    name: str
    location: CodeLocation
    type: CType
    is_read_only: bool = False

    def __repr__(self):
        return f"CFunctionExternParameter({self.name}: {self.type.name})"


@dataclass(frozen=True)
class CFunctionExtern:
    name: str
    location: CodeLocation
    calling_convention: CCallingConvention
    return_type: CType
    parameters: tuple[CFunctionExternParameter, ...] = ()

    def __repr__(self):
        args = ", ".join(f"{p.type.name} {p.name}".strip() for p in self.parameters)
        return f"CFunctionExtern({self.return_type.name} {self.name}({args}))"


@dataclass(frozen=True)
class CFunctionPointer:
    # the type describes the whole pointer-to-function as one value
    name: str
    location: CodeLocation
    type: CType

    def __repr__(self):
        return f"CFunctionPointer({self.name})"
