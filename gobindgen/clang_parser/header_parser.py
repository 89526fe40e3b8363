import os

from clang import cindex
from clang.cindex import CursorKind

from gobindgen import logging as gobindgen_logging, utils

from .enum_info import EnumInfo
from .function_info import FunctionInfo
from .struct_info import FieldInfo, StructInfo

logger = gobindgen_logging.get_logger(__name__)

DEFAULT_ARGS = ('-x', 'c', '-std=c99')


class HeaderParser:
    """Declarations of one header, in source order.

    Only declarations spelled in the header itself are kept; whatever it
    includes is parsed for type information but never generated.
    """

    def __init__(self, filename, extra_args=None, include_paths=None, omit_error=False):
        self.filename = filename
        self._main_file = os.path.abspath(filename)

        index = cindex.Index.create()
        args = list(extra_args) if extra_args is not None else list(DEFAULT_ARGS)
        args.extend(f"-I{path}" for path in include_paths or [])
        args.extend(f"-I{path}" for path in utils.get_compiler_include_paths())
        self.translation_unit = index.parse(
            self.filename, args=args, options=cindex.TranslationUnit.PARSE_SKIP_FUNCTION_BODIES)
        if not omit_error:
            for diag in self.translation_unit.diagnostics:
                if diag.severity >= cindex.Diagnostic.Error:
                    logger.warning("Parsing error in %s: %s", filename, diag.spelling)

        self._functions: dict[str, FunctionInfo] = {}
        self._structs: dict[str, StructInfo] = {}
        self._enums: dict[str, EnumInfo] = {}
        self._extract_declarations()
        logger.info(
            "Parsed %s: %d functions, %d structs, %d enums",
            filename, len(self._functions), len(self._structs), len(self._enums))

    @classmethod
    def from_config(cls, filename, config, include_paths=None):
        parser_cfg = config.get("parser", {})
        paths = list(parser_cfg.get("include_paths", [])) + list(include_paths or [])
        return cls(filename, extra_args=parser_cfg.get("args"), include_paths=paths)

    def _in_main_file(self, node) -> bool:
        location = node.location
        if location is None or location.file is None:
            return False
        return os.path.abspath(location.file.name) == self._main_file

    def _extract_declarations(self):
        top_level = [n for n in self.translation_unit.cursor.get_children() if self._in_main_file(n)]

        # typedef names win over struct tags
        claimed = set()
        for node in top_level:
            if node.kind != CursorKind.TYPEDEF_DECL:
                continue
            declaration = node.underlying_typedef_type.get_canonical().get_declaration()
            if declaration.kind != CursorKind.STRUCT_DECL or not declaration.is_definition():
                continue
            if not self._in_main_file(declaration):
                continue
            claimed.add(declaration.hash)
            self._add_struct(StructInfo(
                declaration,
                node.spelling,
                c_type=node.spelling,
                type=node.type,
                fields=self._fields_of(declaration),
                raw_comment=node.raw_comment or declaration.raw_comment,
            ))

        for node in top_level:
            if node.kind == CursorKind.FUNCTION_DECL:
                if node.spelling not in self._functions:
                    self._functions[node.spelling] = FunctionInfo(node, node.spelling)
            elif node.kind == CursorKind.STRUCT_DECL and node.is_definition():
                if node.hash in claimed or not node.spelling or "unnamed" in node.spelling:
                    continue
                self._add_struct(StructInfo(
                    node,
                    node.spelling,
                    c_type=f"struct_{node.spelling}",
                    type=node.type,
                    fields=self._fields_of(node),
                    raw_comment=node.raw_comment,
                ))
            elif node.kind == CursorKind.ENUM_DECL and node.is_definition():
                name = node.spelling
                if name and "unnamed" not in name and name not in self._enums:
                    self._enums[name] = EnumInfo(node, name)

    def _add_struct(self, struct: StructInfo):
        if struct.name not in self._structs:
            self._structs[struct.name] = struct

    @staticmethod
    def _fields_of(node) -> list[FieldInfo]:
        return [FieldInfo(child) for child in node.get_children() if child.kind == CursorKind.FIELD_DECL]

    def get_functions(self) -> list[FunctionInfo]:
        return list(self._functions.values())

    def get_structs(self) -> list[StructInfo]:
        return list(self._structs.values())

    def get_struct_info(self, name) -> StructInfo:
        if name not in self._structs:
            raise ValueError(f"Struct {name} not found")
        return self._structs[name]

    def get_enums(self) -> list[EnumInfo]:
        return list(self._enums.values())

    def get_declarations(self) -> list:
        """Structs, enums and functions ordered by their position in the header."""
        declarations = [*self._structs.values(), *self._enums.values(), *self._functions.values()]
        return sorted(declarations, key=lambda d: d.node.location.offset)
