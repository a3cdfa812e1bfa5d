from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CodeLocation:
    """Where a declaration was captured. Provenance only."""

    kind: str
    file_name: str
    line: int
    date_time: str = ""

    def as_comment(self) -> str:
        return f"// {self.kind} @ {self.file_name}:{self.line} {self.date_time}".rstrip()


@dataclass(frozen=True)
class CType:
    name: str
    original_name: str
    size_of: int
    align_of: int
    array_size: Optional[int] = None
    is_system_type: bool = False

    @property
    def is_array(self) -> bool:
        return self.array_size is not None

    def __repr__(self):
        if self.is_array:
            return f"CType({self.name}[{self.array_size}])"
        return f"CType({self.name})"
