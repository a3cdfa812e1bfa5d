"""Identifier rules for generated C# code."""

import re
from typing import AbstractSet, MutableSequence

# C# keywords that cannot be used as plain identifiers. Replace this table
# when targeting a different language.
CSHARP_RESERVED_WORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach", "goto",
    "if", "implicit", "in", "int", "interface", "internal", "is", "lock",
    "long", "namespace", "new", "null", "object", "operator", "out",
    "override", "params", "private", "protected", "public", "readonly",
    "record", "ref", "return", "sbyte", "sealed", "short", "sizeof",
    "stackalloc", "static", "string", "struct", "switch", "this", "throw",
    "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
    "ushort", "using", "virtual", "void", "volatile", "while",
})

ESCAPE_MARKER = "@"
DEFAULT_PARAMETER_NAME = "param"

_DIGIT_SUFFIX_RE = re.compile(r"^(.*?)([0-9]+)$", re.S)


def sanitize_identifier(name: str, reserved_words: AbstractSet[str] = CSHARP_RESERVED_WORDS) -> str:
    if name in reserved_words:
        return f"{ESCAPE_MARKER}{name}"
    return name


def _next_candidate(name: str) -> str:
    match = _DIGIT_SUFFIX_RE.match(name)
    if match is None:
        return f"{name}2"
    prefix, digits = match.groups()
    return f"{prefix}{int(digits) + 1}"


def unique_parameter_name(candidate: str, already_used: MutableSequence[str]) -> str:
    """Return a name for ``candidate`` that is not in ``already_used``.

    Empty names become ``param``. Collisions bump a trailing number
    (``x1`` -> ``x2``) or append ``2`` when there is none. The chosen name is
    appended to ``already_used`` so the next parameter of the same function
    sees it.
    """
    name = candidate or DEFAULT_PARAMETER_NAME
    seen = set()
    while name in already_used:
        # suffixes strictly increase, so a repeat means the bump is broken
        assert name not in seen, f"parameter name {name!r} did not converge"
        seen.add(name)
        name = _next_candidate(name)

    already_used.append(name)
    return name
