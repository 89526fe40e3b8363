from dataclasses import dataclass
from typing import Optional

from gobindgen.data_types import ReturnShape

# Go types
GO_INT8 = "int8"
GO_UINT8 = "uint8"
GO_INT16 = "int16"
GO_UINT16 = "uint16"
GO_INT32 = "int32"
GO_UINT32 = "uint32"
GO_INT64 = "int64"
GO_UINT64 = "uint64"
GO_FLOAT32 = "float32"
GO_FLOAT64 = "float64"
GO_BOOL = "bool"
GO_STRING = "string"
GO_POINTER = "unsafe.Pointer"
GO_TIME = "time.Time"
GO_VOID = "void"

# cgo marshal names, used as C.<name>
C_SCHAR = "schar"
C_UCHAR = "uchar"
C_CHAR = "char"
C_SHORT = "short"
C_USHORT = "ushort"
C_INT = "int"
C_UINT = "uint"
C_LONG = "long"
C_ULONG = "ulong"
C_LONGLONG = "longlong"
C_ULONGLONG = "ulonglong"
C_FLOAT = "float"
C_DOUBLE = "double"

# Go-side wrapper type of the disposable string
DISPOSABLE_STRING = "cxstring"

INT16_FAMILY = frozenset({GO_INT16, GO_UINT16})


@dataclass(frozen=True)
class TypeDescriptor:
    native_name: str
    target_name: str
    marshal_name: str = ""
    pointer_depth: int = 0
    fixed_array_length: Optional[int] = None
    is_primitive: bool = True
    is_array: bool = False
    is_enum_literal: bool = False
    is_function_pointer: bool = False
    is_slice: bool = False
    is_pointer_composition: bool = False
    slice_length_field_name: Optional[str] = None
    shape: ReturnShape = ReturnShape.PRIMITIVE_OR_ENUM

    @property
    def is_void(self) -> bool:
        return self.shape == ReturnShape.VOID

    @property
    def is_composite(self) -> bool:
        return not self.is_primitive

    @property
    def is_native_string(self) -> bool:
        return self.shape == ReturnShape.PLAIN_STRING

    @property
    def is_disposable_string(self) -> bool:
        return self.shape == ReturnShape.DISPOSABLE_STRING

    @property
    def result_name(self) -> str:
        """Name of this type when it is handed back to Go callers."""
        if self.is_disposable_string:
            return GO_STRING
        return self.target_name

    def __repr__(self):
        return f"TypeDescriptor({self.native_name!r} -> {'*' * self.pointer_depth}{self.target_name})"
