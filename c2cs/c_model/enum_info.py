from dataclasses import dataclass

from .c_type import CodeLocation, CType


@dataclass(frozen=True)
class CEnumValue:
    name: str
    location: CodeLocation
    value: int

    def __repr__(self):
        return f"CEnumValue({self.name} = {self.value})"


@dataclass(frozen=True)
class CEnum:
    name: str
    location: CodeLocation
    integer_type: CType
    values: tuple[CEnumValue, ...] = ()

    def __repr__(self):
        return f"CEnum({self.name})"
