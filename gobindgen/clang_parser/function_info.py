from clang.cindex import Cursor

from gobindgen.data_types import DeclarationKind


class FunctionInfo:
    kind = DeclarationKind.FUNCTION

    def __init__(self, node, name):
        self.node: Cursor = node
        self.name: str = name
        self.location = f"{node.location.file}:{node.location.line}"

    def __repr__(self):
        return f"FunctionInfo({self.name})"
