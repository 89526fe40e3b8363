import re
from dataclasses import replace
from typing import Iterable, Optional

from gobindgen import logging as gobindgen_logging
from gobindgen.errors import MalformedDeclaration, UnresolvedArrayLength
from gobindgen.naming import derive_array_name, upper_first
from gobindgen.type_mapper import TypeDescriptor
from gobindgen.type_mapper.type_info import GO_POINTER

from .descriptors import (LengthSource, ReceiverDescriptor,
                          SliceAccessorDescriptor, SliceAccessorResult)
from .statements import (AddressOf, CompositeLit, Deref, Expr, Ident, Index,
                         IntLit, Selector, cast, member)

logger = gobindgen_logging.get_logger(__name__)

_ARRAY_SUFFIX_RE = re.compile(r"\[\d*\]")
_QUALIFIER_RE = re.compile(r"\b(const|volatile|restrict)\b")

SLICE_VAR = "goslice"
INDEX_VAR = "is"


def cgo_type_name(native_name: str) -> str:
    """cgo spelling of the value type behind a possibly qualified pointer."""
    name = _ARRAY_SUFFIX_RE.sub("", native_name)
    name = _QUALIFIER_RE.sub("", name).replace("*", " ")
    name = " ".join(name.split())
    for keyword in ("struct", "union", "enum"):
        if name.startswith(keyword + " "):
            return f"{keyword}_{name[len(keyword) + 1:]}"
    return name


def slice_accessor_name(member_name: str, length_field: Optional[str]) -> str:
    if length_field:
        derived = derive_array_name(length_field)
        if derived:
            return upper_first(derived)
    return upper_first(member_name)


class SliceAccessorSynthesizer:
    """Accessors that copy a struct's array member into a fresh Go slice."""

    def synthesize(
        self,
        receiver: ReceiverDescriptor,
        member_name: str,
        member_type: TypeDescriptor,
        *,
        length_field: Optional[str] = None,
        sibling_fields: Iterable[str] = (),
        struct_name: str = "",
        doc_comment: str = "",
    ) -> SliceAccessorResult:
        struct_name = struct_name or receiver.type.native_name
        siblings = set(sibling_fields)

        if member_type.fixed_array_length is not None:
            length_source = LengthSource(count=member_type.fixed_array_length)
            element_depth = member_type.pointer_depth
            dimension = 2 if element_depth >= 1 else 1
        else:
            if not length_field:
                raise UnresolvedArrayLength(struct_name, member_name)
            if siblings and length_field not in siblings:
                raise UnresolvedArrayLength(struct_name, member_name, length_field)
            if member_type.pointer_depth not in (1, 2):
                raise MalformedDeclaration(
                    f"{struct_name}.{member_name}",
                    f"variable-length member needs one or two pointer levels, got {member_type.pointer_depth}")
            length_source = LengthSource(field=length_field)
            element_depth = member_type.pointer_depth - 1
            dimension = member_type.pointer_depth

        if member_type.target_name == GO_POINTER:
            # void* slots are already pointer sized values
            dimension = 1
            element_type = replace(member_type, pointer_depth=1, is_array=False, fixed_array_length=None)
            source_element = "*C.void"
        else:
            element_type = replace(member_type, pointer_depth=0, is_array=False, fixed_array_length=None)
            value_type = cgo_type_name(member_type.native_name)
            if element_type.is_primitive and element_type.marshal_name:
                value_type = element_type.marshal_name
            source_element = f"{'*' if dimension == 2 else ''}C.{value_type}"

        if element_depth > 1:
            raise MalformedDeclaration(
                f"{struct_name}.{member_name}", "arrays of pointers to pointers are not supported")

        accessor = SliceAccessorDescriptor(
            element_type=element_type,
            dimension=dimension,
            length_source=length_source,
            source_member_name=member_name,
        )

        slot: Expr = Index(Ident(SLICE_VAR), Ident(INDEX_VAR))
        if dimension == 2:
            slot = Deref(slot)
        if element_type.is_composite:
            element_expr: Expr = CompositeLit(element_type.target_name, (slot,))
        else:
            element_expr = cast(element_type.target_name, slot)
        if dimension == 2:
            element_expr = AddressOf(element_expr)

        if length_source.is_fixed:
            length_expr: Expr = IntLit(length_source.count)
        else:
            length_expr = cast("int", Selector(member(receiver.name, "c"), length_source.field))

        name = slice_accessor_name(member_name, length_field)
        logger.debug("Slice accessor %s.%s over %s (dimension %d)", receiver.type.target_name, name, member_name, dimension)
        return SliceAccessorResult(
            name=name,
            receiver=receiver,
            accessor=accessor,
            slice_type=replace(member_type, is_slice=True, slice_length_field_name=length_source.field),
            element_result=f"{'*' if dimension == 2 else ''}{element_type.target_name}",
            source_element=source_element,
            element_expr=element_expr,
            length_expr=length_expr,
            doc_comment=doc_comment,
        )
