import pytest

from gobindgen.emitter import GoEmitter, GoStructType, go_type, render_expr
from gobindgen.synthesizer import FunctionSynthesizer
from gobindgen.synthesizer.statements import (AddressOf, Call, CompositeLit,
                                              Deref, Ident, Index, IntLit,
                                              NotEqual, PointerType, c_call,
                                              c_ref, cast, member)
from gobindgen.type_mapper import resolve
from tests.utils import (const_char_pointer, int_type, make_argument,
                         make_function, opaque_typedef, pointer_to,
                         struct_typedef, uint_type)


def test_render_expressions():
    assert render_expr(c_call("clang_getFile", member("tu", "c"), Ident("c_name"))) == "C.clang_getFile(tu.c, c_name)"
    assert render_expr(CompositeLit("File", (Ident("x"),))) == "File{x}"
    assert render_expr(AddressOf(Deref(Index(Ident("goslice"), Ident("is"))))) == "&*goslice[is]"
    assert render_expr(NotEqual(Ident("o"), c_call("uint", IntLit(0)))) == "o != C.uint(0)"
    assert render_expr(cast("int64", Ident("t"))) == "int64(t)"
    unsafe_pointer = Call(member("unsafe", "Pointer"), (Ident("flags"),))
    assert render_expr(Call(PointerType(c_ref("uint")), (unsafe_pointer,))) == "(*C.uint)(unsafe.Pointer(flags))"


def test_render_unknown_expression():
    with pytest.raises(TypeError):
        render_expr("o")


def test_go_type():
    assert go_type(resolve(int_type())) == "int16"
    assert go_type(resolve(pointer_to(int_type()))) == "*int16"
    assert go_type(resolve(pointer_to(struct_typedef("CXCursor")))) == "*Cursor"
    assert go_type(resolve(const_char_pointer())) == "string"


def test_is_file_multiple_include_guarded():
    node = make_function(
        "clang_isFileMultipleIncludeGuarded", uint_type(),
        [
            make_argument("tu", opaque_typedef("CXTranslationUnit")),
            make_argument("file", opaque_typedef("CXFile")),
        ],
        raw_comment="/**\n * Determine whether the given header is guarded against\n"
                    " * multiple inclusions.\n */",
    )
    result = FunctionSynthesizer().generate(node)
    code = GoEmitter().render_function(result)
    assert code.splitlines() == [
        "// Determine whether the given header is guarded against multiple inclusions.",
        "func (tu TranslationUnit) IsFileMultipleIncludeGuarded(file File) bool {",
        "\to := C.clang_isFileMultipleIncludeGuarded(tu.c, file.c)",
        "",
        "\treturn o != C.uint(0)",
        "}",
    ]


def test_multiple_results_are_parenthesized():
    node = make_function("clang_getLine", int_type(), [
        make_argument("c", struct_typedef("CXCursor")),
        make_argument("line", pointer_to(uint_type())),
    ])
    code = GoEmitter().render_function(FunctionSynthesizer().generate(node))
    assert code.splitlines()[0] == "func (c Cursor) Line() (int16, uint16) {"


def test_render_file_collects_imports():
    node = make_function("clang_getFile", opaque_typedef("CXFile"), [
        make_argument("tu", opaque_typedef("CXTranslationUnit")),
        make_argument("file_name", const_char_pointer()),
    ])
    emitter = GoEmitter("phoenix", ['"index.h"', "<stdlib.h>"])
    code = emitter.render_file([
        GoStructType("TranslationUnit", "CXTranslationUnit", "// A single translation unit."),
        FunctionSynthesizer().generate(node),
    ])
    lines = code.splitlines()
    assert lines[:12] == [
        "// Code generated by gobindgen. DO NOT EDIT.",
        "",
        "package phoenix",
        "",
        '// #include "index.h"',
        "// #include <stdlib.h>",
        'import "C"',
        "",
        "import (",
        '\t"unsafe"',
        ")",
        "",
    ]
    assert "type TranslationUnit struct {" in lines
    assert "\tc C.CXTranslationUnit" in lines
    assert code.endswith("}\n")


def test_render_file_without_imports():
    code = GoEmitter().render_file([GoStructType("Cursor", "CXCursor")])
    assert "import (" not in code
    assert "package clang" in code


def test_render_rejects_unknown_items():
    with pytest.raises(TypeError):
        GoEmitter().render(object())
