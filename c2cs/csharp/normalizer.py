"""Whitespace and layout rules for generated C# source.

The generated text has to be stable across regenerations so that diffs only
show real ABI changes. These helpers are applied by the code generator; they
never look at the binding model, only at strings.
"""

import re
from typing import Iterable

_SPACE_BEFORE_POINTER_RE = re.compile(r"\s+(?=\*)")
_POINTER_BEFORE_TOKEN_RE = re.compile(r"\*[ \t]*(?=[A-Za-z_@])")
_POINTER_BEFORE_PUNCT_RE = re.compile(r"\*[ \t]+(?=[,>)\]\[;])")
_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.M)
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_BLANK_AFTER_OPEN_RE = re.compile(r"\{\n\n+")
_BLANK_BEFORE_CLOSE_RE = re.compile(r"\n\n+(?=[ \t]*\})")


def normalize_pointer_syntax(type_name: str) -> str:
    """Attach ``*`` to the element type and space it from the next token.

    ``int *`` -> ``int*``, ``char * *`` -> ``char**``,
    ``delegate*unmanaged<int *, void>`` -> ``delegate* unmanaged<int*, void>``.
    """
    text = _SPACE_BEFORE_POINTER_RE.sub("", type_name.strip())
    text = _POINTER_BEFORE_TOKEN_RE.sub("* ", text)
    text = _POINTER_BEFORE_PUNCT_RE.sub("*", text)
    return text


def declaration(type_name: str, name: str) -> str:
    return f"{normalize_pointer_syntax(type_name)} {name}"


def field_offset_attribute(offset: int, size: int, padding: int) -> str:
    # the recorded offset, never a recomputed one
    return f"[FieldOffset({offset})] // size = {size}, padding = {padding}"


def join_members(blocks: Iterable[str]) -> str:
    """One blank line between members, none after the last."""
    members = [block.strip("\n") for block in blocks]
    return "\n\n".join(member for member in members if member.strip())


def normalize_whitespace(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = _TRAILING_WS_RE.sub("", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    text = _BLANK_AFTER_OPEN_RE.sub("{\n", text)
    text = _BLANK_BEFORE_CLOSE_RE.sub("\n", text)
    return text.strip("\n") + "\n"
