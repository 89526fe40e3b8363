from clang.cindex import Cursor

from gobindgen.data_types import DeclarationKind


class FieldInfo:
    def __init__(self, node):
        self.node: Cursor = node
        self.name: str = node.spelling
        self.type = node.type
        self.raw_comment = node.raw_comment

    def __repr__(self):
        return f"FieldInfo({self.name})"


class StructInfo:
    """A struct definition, named after its typedef when it has one.

    ``type`` is the type used to resolve the Go wrapper name and ``c_type``
    is its cgo spelling (``CXCursor`` or ``struct_Foo``).
    """
    kind = DeclarationKind.STRUCT

    def __init__(self, node, name, c_type, type, fields=None, raw_comment=None):
        self.node: Cursor = node
        self.name: str = name
        self.c_type: str = c_type
        self.type = type
        self.fields: list[FieldInfo] = fields if fields is not None else []
        self.raw_comment = raw_comment
        self.location = f"{node.location.file}:{node.location.line}"

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def __hash__(self):
        return hash(self.name) + hash(self.location)

    def __eq__(self, other):
        return self.name == other.name and self.location == other.location

    def __repr__(self):
        return f"StructInfo({self.name})"
