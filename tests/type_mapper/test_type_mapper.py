import pytest
from clang.cindex import TypeKind

from gobindgen.data_types import ReturnShape
from gobindgen.errors import MalformedDeclaration, UnhandledTypeKind
from gobindgen.type_mapper import MappingRules, resolve
from tests.utils import (const_array, const_char_pointer, cxstring, enum_type,
                         int_type, make_type, opaque_typedef, pointer_to,
                         primitive, record, struct_typedef, typedef)


@pytest.mark.parametrize("kind, spelling, marshal_name, target_name", [
    (TypeKind.CHAR_S, "char", "schar", "int8"),
    (TypeKind.SCHAR, "signed char", "schar", "int8"),
    (TypeKind.CHAR_U, "char", "uchar", "uint8"),
    (TypeKind.UCHAR, "unsigned char", "uchar", "uint8"),
    (TypeKind.SHORT, "short", "short", "int16"),
    (TypeKind.USHORT, "unsigned short", "ushort", "uint16"),
    (TypeKind.INT, "int", "int", "int16"),
    (TypeKind.UINT, "unsigned int", "uint", "uint16"),
    (TypeKind.LONG, "long", "long", "int32"),
    (TypeKind.ULONG, "unsigned long", "ulong", "uint32"),
    (TypeKind.LONGLONG, "long long", "longlong", "int64"),
    (TypeKind.ULONGLONG, "unsigned long long", "ulonglong", "uint64"),
    (TypeKind.FLOAT, "float", "float", "float32"),
    (TypeKind.DOUBLE, "double", "double", "float64"),
])
def test_numeric_kinds(kind, spelling, marshal_name, target_name):
    descriptor = resolve(primitive(kind, spelling))
    assert descriptor.marshal_name == marshal_name
    assert descriptor.target_name == target_name
    assert descriptor.is_primitive
    assert descriptor.pointer_depth == 0
    assert descriptor.fixed_array_length is None
    assert descriptor.shape == ReturnShape.PRIMITIVE_OR_ENUM


def test_bool_has_no_marshal_name():
    descriptor = resolve(primitive(TypeKind.BOOL, "_Bool"))
    assert descriptor.target_name == "bool"
    assert descriptor.marshal_name == ""


def test_void():
    descriptor = resolve(make_type(TypeKind.VOID, "void"))
    assert descriptor.is_void
    assert descriptor.shape == ReturnShape.VOID


def test_resolution_is_deterministic():
    native_type = pointer_to(struct_typedef("CXCursor"))
    assert resolve(native_type) == resolve(native_type)


def test_pointer_depth_is_additive():
    assert resolve(pointer_to(int_type())).pointer_depth == 1
    double_pointer = resolve(pointer_to(pointer_to(int_type())))
    assert double_pointer.pointer_depth == 2
    assert double_pointer.target_name == "int16"
    assert double_pointer.marshal_name == "int"
    assert double_pointer.is_primitive


def test_pointer_keeps_composite_classification():
    descriptor = resolve(pointer_to(struct_typedef("CXCursor")))
    assert descriptor.target_name == "Cursor"
    assert descriptor.pointer_depth == 1
    assert descriptor.is_composite
    assert descriptor.shape == ReturnShape.COMPOSITE


def test_const_char_pointer_is_plain_string():
    descriptor = resolve(const_char_pointer())
    assert descriptor.target_name == "string"
    assert descriptor.marshal_name == "char"
    assert descriptor.is_native_string


def test_mutable_char_pointer_is_not_a_string():
    descriptor = resolve(pointer_to(primitive(TypeKind.CHAR_S, "char")))
    assert not descriptor.is_native_string
    assert descriptor.target_name == "int8"
    assert descriptor.pointer_depth == 1


def test_void_pointer_is_unsafe_pointer():
    descriptor = resolve(pointer_to(make_type(TypeKind.VOID, "void")))
    assert descriptor.target_name == "unsafe.Pointer"
    assert descriptor.pointer_depth == 1


def test_function_pointer_is_flagged():
    prototype = make_type(TypeKind.FUNCTIONPROTO, "void (void *)")
    descriptor = resolve(pointer_to(prototype, "void (*)(void *)"))
    assert descriptor.is_function_pointer
    assert descriptor.target_name == "unsafe.Pointer"


def test_constant_array_inherits_element():
    descriptor = resolve(const_array(pointer_to(struct_typedef("CXCursor")), 4))
    assert descriptor.is_array
    assert descriptor.fixed_array_length == 4
    assert descriptor.pointer_depth == 1
    assert descriptor.target_name == "Cursor"
    assert descriptor.is_composite


def test_disposable_string_typedef():
    descriptor = resolve(cxstring())
    assert descriptor.target_name == "cxstring"
    assert descriptor.is_disposable_string
    assert descriptor.result_name == "string"
    assert descriptor.is_composite


def test_timestamp_typedef():
    descriptor = resolve(typedef("time_t", primitive(TypeKind.LONG, "long")))
    assert descriptor.target_name == "time.Time"
    assert descriptor.marshal_name == "time_t"
    assert descriptor.is_primitive
    assert descriptor.shape == ReturnShape.TIMESTAMP


def test_typedef_of_enum_is_enum_literal():
    descriptor = resolve(typedef("CXErrorCode", enum_type("CXErrorCode")))
    assert descriptor.target_name == "ErrorCode"
    assert descriptor.marshal_name == "CXErrorCode"
    assert descriptor.is_enum_literal
    assert descriptor.is_primitive


def test_typedef_of_struct_is_composite():
    descriptor = resolve(opaque_typedef("CXTranslationUnit"))
    assert descriptor.target_name == "TranslationUnit"
    assert descriptor.marshal_name == ""
    assert descriptor.pointer_depth == 0
    assert descriptor.is_composite


def test_record_and_enum():
    assert resolve(record("CXSourceLocation")).target_name == "SourceLocation"
    descriptor = resolve(enum_type("CXCursorKind"))
    assert descriptor.target_name == "CursorKind"
    assert descriptor.marshal_name == "enum_CXCursorKind"
    assert descriptor.is_enum_literal


def test_unexposed_adopts_canonical():
    canonical = enum_type("CXCursorKind")
    unexposed = make_type(TypeKind.UNEXPOSED, "enum CXCursorKind", canonical=canonical)
    assert resolve(unexposed) == resolve(canonical)


def test_elaborated_resolves_named_type():
    named = struct_typedef("CXCursor")
    elaborated = make_type(TypeKind.ELABORATED, "CXCursor", named=named)
    assert resolve(elaborated) == resolve(named)


def test_custom_prefixes():
    rules = MappingRules(type_prefixes=("git_",))
    assert resolve(struct_typedef("git_repository"), rules).target_name == "repository"


def test_unhandled_kind_raises():
    with pytest.raises(UnhandledTypeKind) as excinfo:
        resolve(make_type(TypeKind.COMPLEX, "_Complex double"))
    assert excinfo.value.spelling == "_Complex double"
    assert excinfo.value.kind == "COMPLEX"
    assert "_Complex double" in str(excinfo.value)


def test_pointer_to_string_raises():
    argv = pointer_to(const_char_pointer(), "const char **")
    with pytest.raises(UnhandledTypeKind) as excinfo:
        resolve(argv)
    assert excinfo.value.spelling == "const char **"
    assert excinfo.value.kind == "POINTER"


def test_typedef_without_declaration_is_malformed():
    with pytest.raises(MalformedDeclaration):
        resolve(make_type(TypeKind.TYPEDEF, "broken"))
