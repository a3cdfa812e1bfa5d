from dataclasses import dataclass

from .c_type import CodeLocation, CType


@dataclass(frozen=True)
class CRecordField:
    name: str
    location: CodeLocation
    type: CType
    offset: int
    padding: int

    def __repr__(self):
        return f"CRecordField({self.name} @ {self.offset})"


@dataclass(frozen=True)
class CRecord:
    """A struct or union definition.

    ``nested_records`` holds anonymous or inline sub-records embedded by value;
    they are owned by this record, so the whole thing is a tree.
    """

    name: str
    location: CodeLocation
    type: CType
    fields: tuple[CRecordField, ...] = ()
    nested_records: tuple["CRecord", ...] = ()

    def __repr__(self):
        return f"CRecord({self.name})"
