import pytest

from gobindgen.emitter import GoEmitter, render_expr
from gobindgen.errors import UnresolvedArrayLength
from gobindgen.synthesizer import (LengthSource, ReceiverDescriptor,
                                   SliceAccessorSynthesizer)
from gobindgen.synthesizer.slice_synthesizer import cgo_type_name
from gobindgen.type_mapper import resolve
from tests.utils import (const_array, pointer_to, struct_typedef, uint_type,
                         make_type)
from clang.cindex import TypeKind


@pytest.fixture
def receiver():
    return ReceiverDescriptor("ccr", resolve(struct_typedef("CXCodeCompleteResults")))


def test_two_dimensional_fixed_array(receiver):
    member_type = resolve(const_array(pointer_to(struct_typedef("CXCursor")), 4))
    result = SliceAccessorSynthesizer().synthesize(receiver, "children", member_type)

    assert result.accessor.dimension == 2
    assert result.accessor.length_source == LengthSource(count=4)
    assert result.accessor.element_type.target_name == "Cursor"
    assert result.element_result == "*Cursor"
    assert result.source_element == "*C.CXCursor"
    assert result.slice_type.is_slice
    assert render_expr(result.element_expr) == "&Cursor{*goslice[is]}"
    assert render_expr(result.length_expr) == "4"
    assert result.name == "Children"

    code = GoEmitter().render_slice_accessor(result)
    assert code.splitlines() == [
        "func (ccr CodeCompleteResults) Children() []*Cursor {",
        "\tsc := []*Cursor{}",
        "",
        "\tlength := 4",
        "\tgoslice := (*[1 << 30]*C.CXCursor)(unsafe.Pointer(&ccr.c.children))[:length:length]",
        "",
        "\tfor is := 0; is < length; is++ {",
        "\t\tsc = append(sc, &Cursor{*goslice[is]})",
        "\t}",
        "",
        "\treturn sc",
        "}",
    ]


def test_variable_array_uses_count_field(receiver):
    member_type = resolve(pointer_to(struct_typedef("CXCompletionResult")))
    result = SliceAccessorSynthesizer().synthesize(
        receiver, "Results", member_type,
        length_field="NumResults", sibling_fields=["Results", "NumResults"])

    assert result.accessor.dimension == 1
    assert result.accessor.length_source == LengthSource(field="NumResults")
    assert result.slice_type.slice_length_field_name == "NumResults"
    assert result.name == "Results"
    assert render_expr(result.length_expr) == "int(ccr.c.NumResults)"
    assert render_expr(result.element_expr) == "CompletionResult{goslice[is]}"

    code = GoEmitter().render_slice_accessor(result)
    assert "(*[1 << 30]C.CXCompletionResult)(unsafe.Pointer(ccr.c.Results))" in code


def test_primitive_elements_are_cast(receiver):
    member_type = resolve(const_array(uint_type(), 3))
    result = SliceAccessorSynthesizer().synthesize(receiver, "data", member_type)
    assert result.accessor.dimension == 1
    assert result.source_element == "C.uint"
    assert result.element_result == "uint16"
    assert render_expr(result.element_expr) == "uint16(goslice[is])"


def test_void_pointer_elements(receiver):
    void_pointer = pointer_to(make_type(TypeKind.VOID, "void"), "void *")
    member_type = resolve(const_array(void_pointer, 2))
    result = SliceAccessorSynthesizer().synthesize(receiver, "ptr_data", member_type)
    assert result.accessor.dimension == 1
    assert result.source_element == "*C.void"
    assert render_expr(result.element_expr) == "unsafe.Pointer(goslice[is])"


def test_missing_count_field(receiver):
    member_type = resolve(pointer_to(struct_typedef("CXCompletionResult")))
    with pytest.raises(UnresolvedArrayLength) as excinfo:
        SliceAccessorSynthesizer().synthesize(receiver, "Results", member_type, struct_name="CXCodeCompleteResults")
    assert "CXCodeCompleteResults.Results" in str(excinfo.value)


def test_count_field_must_be_a_sibling(receiver):
    member_type = resolve(pointer_to(struct_typedef("CXCompletionResult")))
    with pytest.raises(UnresolvedArrayLength) as excinfo:
        SliceAccessorSynthesizer().synthesize(
            receiver, "Results", member_type,
            length_field="NumResults", sibling_fields=["Results", "Count"])
    assert excinfo.value.length_field == "NumResults"


def test_length_source_needs_exactly_one_value():
    with pytest.raises(ValueError):
        LengthSource()
    with pytest.raises(ValueError):
        LengthSource(count=1, field="n")
    assert LengthSource(count=0).is_fixed
    assert not LengthSource(field="n").is_fixed


@pytest.mark.parametrize("native_name, expected", [
    ("CXCursor *[4]", "CXCursor"),
    ("const CXIdxAttrInfo *const *", "CXIdxAttrInfo"),
    ("struct Foo *", "struct_Foo"),
    ("unsigned int [3]", "unsigned int"),
])
def test_cgo_type_name(native_name, expected):
    assert cgo_type_name(native_name) == expected
