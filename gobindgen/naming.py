"""String heuristics that encode the native library's naming conventions.

Everything here is a pure function on strings so each rule can be tested on
its own.
"""

from typing import Iterable, Optional

_ELABORATED_KEYWORDS = ("const ", "struct ", "union ", "enum ")

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})


def trim_language_prefix(name: str, prefixes: Iterable[str] = ("CX_", "CX")) -> str:
    """Strip elaborated keywords and the first matching library prefix.

    >>> trim_language_prefix("struct CXTranslationUnitImpl")
    'TranslationUnitImpl'
    """
    name = name.strip()
    stripped = True
    while stripped:
        stripped = False
        for keyword in _ELABORATED_KEYWORDS:
            if name.startswith(keyword):
                name = name[len(keyword):].lstrip()
                stripped = True
    for prefix in prefixes:
        if name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix):]
    return name


def trim_function_prefix(name: str, prefix: str = "clang_") -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def upper_first(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def receiver_name(type_name: str) -> str:
    """Short receiver identifier made of the type's lowercased capitals.

    ``TranslationUnit`` becomes ``tu`` and ``File`` becomes ``f``; names
    without capitals use their first letter.
    """
    type_name = type_name.split(".")[-1]
    initials = "".join(c for c in type_name if c.isupper())
    if not initials:
        initials = type_name[:1]
    return escape_identifier(initials.lower())


def escape_identifier(name: str) -> str:
    if name in GO_KEYWORDS:
        return name + "_"
    return name


def derive_array_name(length_field_name: str) -> Optional[str]:
    """Name of the array described by a count field, or None.

    Rules are tried in order and the first one that matches wins.
    """
    if length_field_name.startswith("num_"):
        return length_field_name[len("num_"):] or None
    if length_field_name.startswith("num"):
        return length_field_name[len("num"):] or None
    if length_field_name.startswith("Num"):
        rest = length_field_name[len("Num"):]
        # "Numx" is a field of its own, not a count
        if rest and rest[0].isupper():
            return rest
    if length_field_name.endswith("_size"):
        return length_field_name[:-len("_size")] or None
    return None


def is_boolean_predicate(name: str, prefixes: Iterable[str] = ("has", "is")) -> bool:
    return any(name.startswith(prefix) for prefix in prefixes)


def method_name(
    function_name: str,
    receiver_type: str,
    return_type: str = "",
    type_prefixes: Iterable[str] = ("CX_", "CX"),
) -> str:
    """Go method name for a function already stripped of its library prefix.

    ``getTranslationUnitSpelling`` on ``TranslationUnit`` becomes
    ``Spelling``, ``disposeTranslationUnit`` becomes ``Dispose``.

    The receiver type is only stripped when what is left is neither the
    return type's name nor starts with ``_``, so
    ``getTranslationUnitCursor`` stays ``TranslationUnitCursor`` and does
    not clash with ``getCursor``.
    """
    name = function_name
    if name == "dispose" + receiver_type:
        return "Dispose"
    if name.startswith("get") and len(name) > 3 and name[3].isupper():
        name = name[3:]
        # getCXTUResourceUsage returns CXTUResourceUsage
        if return_type and trim_language_prefix(name, type_prefixes) == return_type:
            name = return_type
    if receiver_type and name.startswith(receiver_type) and len(name) > len(receiver_type):
        rest = name[len(receiver_type):]
        if not rest.startswith("_") and rest != return_type:
            name = rest
    return upper_first(name)
