from dataclasses import dataclass

from clang.cindex import TypeKind

from gobindgen import logging as gobindgen_logging
from gobindgen.data_types import ReturnShape
from gobindgen.errors import MalformedDeclaration, UnhandledTypeKind
from gobindgen.naming import trim_language_prefix

from .type_info import (C_CHAR, C_DOUBLE, C_FLOAT, C_INT, C_LONG, C_LONGLONG,
                        C_SCHAR, C_SHORT, C_UCHAR, C_UINT, C_ULONG,
                        C_ULONGLONG, C_USHORT, DISPOSABLE_STRING, GO_BOOL,
                        GO_FLOAT32, GO_FLOAT64, GO_INT8, GO_INT16, GO_INT32,
                        GO_INT64, GO_POINTER, GO_STRING, GO_TIME, GO_UINT8,
                        GO_UINT16, GO_UINT32, GO_UINT64, GO_VOID,
                        TypeDescriptor)

logger = gobindgen_logging.get_logger(__name__)

# (marshal name, Go name). int maps to int16 on purpose: the Go side follows
# the value ranges libclang actually uses, not the nominal C width.
_NUMERIC_KINDS = {
    TypeKind.CHAR_S: (C_SCHAR, GO_INT8),
    TypeKind.SCHAR: (C_SCHAR, GO_INT8),
    TypeKind.CHAR_U: (C_UCHAR, GO_UINT8),
    TypeKind.UCHAR: (C_UCHAR, GO_UINT8),
    TypeKind.SHORT: (C_SHORT, GO_INT16),
    TypeKind.USHORT: (C_USHORT, GO_UINT16),
    TypeKind.INT: (C_INT, GO_INT16),
    TypeKind.UINT: (C_UINT, GO_UINT16),
    TypeKind.LONG: (C_LONG, GO_INT32),
    TypeKind.ULONG: (C_ULONG, GO_UINT32),
    TypeKind.LONGLONG: (C_LONGLONG, GO_INT64),
    TypeKind.ULONGLONG: (C_ULONGLONG, GO_UINT64),
    TypeKind.FLOAT: (C_FLOAT, GO_FLOAT32),
    TypeKind.DOUBLE: (C_DOUBLE, GO_FLOAT64),
}

_CHARACTER_KINDS = frozenset({
    TypeKind.CHAR_S,
    TypeKind.SCHAR,
    TypeKind.CHAR_U,
    TypeKind.UCHAR,
})


@dataclass(frozen=True)
class MappingRules:
    type_prefixes: tuple[str, ...] = ("CX_", "CX")
    disposable_string_types: frozenset[str] = frozenset({"CXString"})
    timestamp_types: frozenset[str] = frozenset({"time_t"})

    @classmethod
    def from_config(cls, config: dict) -> "MappingRules":
        generate_cfg = config.get("generate", {}) if config else {}
        defaults = cls()
        return cls(
            type_prefixes=tuple(generate_cfg.get("type_prefixes", defaults.type_prefixes)),
            disposable_string_types=frozenset(
                generate_cfg.get("disposable_string_types", defaults.disposable_string_types)),
            timestamp_types=frozenset(generate_cfg.get("timestamp_types", defaults.timestamp_types)),
        )

    def trim(self, name: str) -> str:
        return trim_language_prefix(name, self.type_prefixes)


DEFAULT_RULES = MappingRules()


def _kind_name(kind) -> str:
    return getattr(kind, "name", str(kind))


def _declaration_spelling(native_type) -> str:
    declaration = native_type.get_declaration()
    return declaration.type.spelling if declaration is not None else ""


def resolve(native_type, rules: MappingRules = DEFAULT_RULES) -> TypeDescriptor:
    """Map a ``clang.cindex.Type`` to its Go projection.

    Raises UnhandledTypeKind for kinds outside the supported vocabulary;
    callers must abort the declaration rather than guess.
    """
    kind = native_type.kind
    spelling = native_type.spelling

    if kind in _NUMERIC_KINDS:
        marshal_name, target_name = _NUMERIC_KINDS[kind]
        return TypeDescriptor(spelling, target_name, marshal_name=marshal_name)

    if kind == TypeKind.BOOL:
        return TypeDescriptor(spelling, GO_BOOL)

    if kind == TypeKind.VOID:
        return TypeDescriptor(spelling, GO_VOID, marshal_name="void", shape=ReturnShape.VOID)

    if kind == TypeKind.CONSTANTARRAY:
        element = resolve(native_type.get_array_element_type(), rules)
        return TypeDescriptor(
            spelling,
            element.target_name,
            marshal_name=element.marshal_name,
            pointer_depth=element.pointer_depth,
            fixed_array_length=native_type.get_array_size(),
            is_primitive=element.is_primitive,
            is_array=True,
            is_enum_literal=element.is_enum_literal,
            is_function_pointer=element.is_function_pointer,
            shape=element.shape,
        )

    if kind == TypeKind.TYPEDEF:
        return _resolve_typedef(native_type, rules)

    if kind == TypeKind.POINTER:
        return _resolve_pointer(native_type, rules)

    if kind == TypeKind.RECORD:
        declaration_name = _declaration_spelling(native_type) or spelling
        if not declaration_name:
            raise MalformedDeclaration(spelling, "record type without a declaration name")
        return TypeDescriptor(
            spelling,
            rules.trim(declaration_name),
            is_primitive=False,
            shape=ReturnShape.COMPOSITE,
        )

    if kind == TypeKind.FUNCTIONPROTO:
        declaration_name = _declaration_spelling(native_type)
        if declaration_name:
            return TypeDescriptor(
                spelling,
                rules.trim(declaration_name),
                marshal_name=declaration_name,
                is_function_pointer=True,
            )
        # anonymous prototype, only reachable through a raw pointer
        return TypeDescriptor(spelling, GO_POINTER, is_function_pointer=True)

    if kind == TypeKind.ENUM:
        declaration = native_type.get_declaration()
        return TypeDescriptor(
            spelling,
            rules.trim(declaration.displayname),
            marshal_name=f"enum_{declaration.spelling}",
            is_enum_literal=True,
        )

    if kind == TypeKind.UNEXPOSED:
        # libclang reports some enums as unexposed, see llvm bug 15089
        logger.debug("Re-resolving unexposed type %r through its canonical type", spelling)
        return resolve(native_type.get_canonical(), rules)

    if kind == TypeKind.ELABORATED:
        return resolve(native_type.get_named_type(), rules)

    raise UnhandledTypeKind(spelling, _kind_name(kind))


def _resolve_typedef(native_type, rules: MappingRules) -> TypeDescriptor:
    spelling = native_type.spelling
    declaration_name = _declaration_spelling(native_type)
    if not declaration_name:
        raise MalformedDeclaration(spelling, "typedef without a declaration")

    if declaration_name in rules.disposable_string_types:
        return TypeDescriptor(
            spelling,
            DISPOSABLE_STRING,
            is_primitive=False,
            shape=ReturnShape.DISPOSABLE_STRING,
        )

    if declaration_name in rules.timestamp_types:
        # primitive despite being a typedef, the call boundary still casts
        return TypeDescriptor(
            spelling,
            GO_TIME,
            marshal_name=declaration_name,
            shape=ReturnShape.TIMESTAMP,
        )

    if native_type.get_canonical().kind == TypeKind.ENUM:
        return TypeDescriptor(
            spelling,
            rules.trim(declaration_name),
            marshal_name=declaration_name,
            is_enum_literal=True,
        )

    return TypeDescriptor(
        spelling,
        rules.trim(declaration_name),
        is_primitive=False,
        shape=ReturnShape.COMPOSITE,
    )


def _resolve_pointer(native_type, rules: MappingRules) -> TypeDescriptor:
    spelling = native_type.spelling
    pointee = native_type.get_pointee()
    canonical_pointee = pointee.get_canonical()

    if canonical_pointee.kind == TypeKind.VOID:
        return TypeDescriptor(spelling, GO_POINTER, pointer_depth=1)

    if pointee.kind in _CHARACTER_KINDS and pointee.is_const_qualified():
        return TypeDescriptor(
            spelling,
            GO_STRING,
            marshal_name=C_CHAR,
            pointer_depth=1,
            shape=ReturnShape.PLAIN_STRING,
        )

    sub = resolve(pointee, rules)
    if sub.shape == ReturnShape.PLAIN_STRING:
        # no Go projection for arrays of C strings such as argv
        raise UnhandledTypeKind(spelling, _kind_name(native_type.kind))
    return TypeDescriptor(
        spelling,
        sub.target_name,
        marshal_name=sub.marshal_name,
        pointer_depth=sub.pointer_depth + 1,
        is_primitive=sub.is_primitive,
        is_function_pointer=canonical_pointee.kind == TypeKind.FUNCTIONPROTO or sub.is_function_pointer,
        shape=sub.shape,
    )
