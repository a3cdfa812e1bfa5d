from dataclasses import dataclass

from .c_type import CodeLocation, CType


@dataclass(frozen=True)
class COpaquePointer:
    name: str
    location: CodeLocation
    pointer_type: CType

    def __repr__(self):
        return f"COpaquePointer({self.name})"


@dataclass(frozen=True)
class COpaqueDataType:
    # forward-declared, never defined: no size or layout
    name: str
    location: CodeLocation

    def __repr__(self):
        return f"COpaqueDataType({self.name})"


@dataclass(frozen=True)
class CAliasType:
    name: str
    location: CodeLocation
    underlying_type: CType

    def __repr__(self):
        return f"CAliasType({self.name} = {self.underlying_type.name})"
