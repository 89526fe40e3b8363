from dataclasses import dataclass
from typing import Optional

from gobindgen.type_mapper import TypeDescriptor

from .statements import Expr, Statement


@dataclass(frozen=True)
class ReceiverDescriptor:
    name: str
    type: TypeDescriptor


@dataclass(frozen=True)
class ParameterDescriptor:
    native_name: str
    target_name: str
    type: TypeDescriptor
    is_out_parameter: bool = False


@dataclass(frozen=True)
class FunctionDescriptor:
    native_name: str
    target_name: str
    return_type: TypeDescriptor
    parameters: tuple[ParameterDescriptor, ...] = ()
    doc_comment: str = ""
    receiver: Optional[ReceiverDescriptor] = None
    member_name: Optional[str] = None

    @property
    def out_parameters(self) -> tuple[ParameterDescriptor, ...]:
        return tuple(p for p in self.parameters if p.is_out_parameter)


@dataclass(frozen=True)
class Signature:
    receiver: Optional[ReceiverDescriptor]
    parameters: tuple[ParameterDescriptor, ...]
    results: tuple[str, ...]


@dataclass(frozen=True)
class SynthesisResult:
    """Everything the emitter needs for one generated function or method."""
    function: FunctionDescriptor
    signature: Signature
    statements: tuple[Statement, ...]

    @property
    def name(self) -> str:
        return self.function.target_name

    @property
    def doc_comment(self) -> str:
        return self.function.doc_comment


@dataclass(frozen=True)
class LengthSource:
    """Either a literal element count or the name of a sibling count field."""
    count: Optional[int] = None
    field: Optional[str] = None

    def __post_init__(self):
        if (self.count is None) == (self.field is None):
            raise ValueError("LengthSource needs exactly one of count or field")

    @property
    def is_fixed(self) -> bool:
        return self.count is not None


@dataclass(frozen=True)
class SliceAccessorDescriptor:
    element_type: TypeDescriptor
    dimension: int
    length_source: LengthSource
    source_member_name: str


@dataclass(frozen=True)
class SliceAccessorResult:
    name: str
    receiver: ReceiverDescriptor
    accessor: SliceAccessorDescriptor
    # the member type seen as a slice (is_slice set)
    slice_type: TypeDescriptor
    # Go element type of the returned slice, "*Cursor" for dimension 2
    element_result: str
    # cgo type of one source slot, used to view the member as a Go array
    source_element: str
    # conversion applied to goslice[is]
    element_expr: Expr
    length_expr: Expr
    doc_comment: str = ""
