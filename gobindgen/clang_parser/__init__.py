from .enum_info import EnumInfo
from .function_info import FunctionInfo
from .header_parser import HeaderParser
from .struct_info import FieldInfo, StructInfo

__all__ = [
    'EnumInfo',
    'FieldInfo',
    'FunctionInfo',
    'HeaderParser',
    'StructInfo',
]
