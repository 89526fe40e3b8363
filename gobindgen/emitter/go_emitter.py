import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Sequence

from jinja2 import Environment, FileSystemLoader

from gobindgen.synthesizer import (ParameterDescriptor, ReceiverDescriptor,
                                   SliceAccessorResult, SynthesisResult)
from gobindgen.synthesizer.statements import (AddressOf, Assign, BlankLine,
                                              Call, CompositeLit, DeclareVar,
                                              Defer, Deref, Expr, ExprStmt,
                                              Ident, Index, IntLit, NotEqual,
                                              PointerType, Return, Selector,
                                              Statement, member)
from gobindgen.type_mapper import TypeDescriptor
from gobindgen.type_mapper.type_info import GO_POINTER

_TEMPLATE_DIR = Path(__file__).with_name("templates")

_IMPORT_RE = {
    "time": re.compile(r"\btime\."),
    "unsafe": re.compile(r"\bunsafe\."),
}


@lru_cache(maxsize=None)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_expr(expr: Expr) -> str:
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, Selector):
        return f"{render_expr(expr.x)}.{expr.sel}"
    if isinstance(expr, Call):
        args = ", ".join(render_expr(arg) for arg in expr.args)
        return f"{render_expr(expr.func)}({args})"
    if isinstance(expr, CompositeLit):
        elements = ", ".join(render_expr(element) for element in expr.elements)
        return f"{expr.type_name}{{{elements}}}"
    if isinstance(expr, AddressOf):
        return "&" + render_expr(expr.x)
    if isinstance(expr, Deref):
        return "*" + render_expr(expr.x)
    if isinstance(expr, Index):
        return f"{render_expr(expr.x)}[{render_expr(expr.index)}]"
    if isinstance(expr, NotEqual):
        return f"{render_expr(expr.x)} != {render_expr(expr.y)}"
    if isinstance(expr, IntLit):
        return str(expr.value)
    if isinstance(expr, PointerType):
        return f"(*{render_expr(expr.elem)})"
    raise TypeError(f"Cannot render expression {expr!r}")


def render_statement(statement: Statement) -> str:
    if isinstance(statement, DeclareVar):
        return f"var {statement.name} {render_expr(statement.type)}"
    if isinstance(statement, Assign):
        return f"{statement.name} := {render_expr(statement.value)}"
    if isinstance(statement, Defer):
        return f"defer {render_expr(statement.call)}"
    if isinstance(statement, ExprStmt):
        return render_expr(statement.expr)
    if isinstance(statement, Return):
        if not statement.results:
            return "return"
        return "return " + ", ".join(render_expr(result) for result in statement.results)
    if isinstance(statement, BlankLine):
        return ""
    raise TypeError(f"Cannot render statement {statement!r}")


def go_type(descriptor: TypeDescriptor) -> str:
    """Go spelling of a parameter type, pointer levels included."""
    name = descriptor.result_name
    if descriptor.is_native_string or name == GO_POINTER:
        return name
    if descriptor.is_function_pointer and descriptor.pointer_depth == 1:
        return name
    return "*" * descriptor.pointer_depth + name


def _receiver(receiver: ReceiverDescriptor) -> str:
    return f"{receiver.name} {receiver.type.target_name}"


def _parameters(parameters: Sequence[ParameterDescriptor]) -> str:
    return ", ".join(f"{p.target_name} {go_type(p.type)}" for p in parameters)


def _results(results: Sequence[str]) -> str:
    if not results:
        return ""
    if len(results) == 1:
        return " " + results[0]
    return " (" + ", ".join(results) + ")"


def _imports_for(blocks: Iterable[str]) -> tuple[str, ...]:
    text = "\n".join(blocks)
    return tuple(sorted(name for name, pattern in _IMPORT_RE.items() if pattern.search(text)))


@dataclass(frozen=True)
class GoStructType:
    """A Go wrapper type holding the native value in its ``c`` field."""
    name: str
    c_type: str
    doc_comment: str = ""


class GoEmitter:
    def __init__(self, package: str = "clang", includes: Iterable[str] = ()):
        self.package = package
        self.includes = tuple(includes)

    def render_function(self, result: SynthesisResult) -> str:
        signature = result.signature
        args: dict[str, Any] = {
            "doc_comment": result.doc_comment,
            "receiver": _receiver(signature.receiver) if signature.receiver else "",
            "name": result.name,
            "parameters": _parameters(signature.parameters),
            "results": _results(signature.results),
            "body": [render_statement(s) for s in result.statements],
        }
        return _get_env().get_template("function.go.j2").render(args)

    def render_slice_accessor(self, result: SliceAccessorResult) -> str:
        source = member(result.receiver.name, "c")
        source_expr = f"{render_expr(source)}.{result.accessor.source_member_name}"
        if result.accessor.length_source.is_fixed:
            source_expr = "&" + source_expr
        args = {
            "doc_comment": result.doc_comment,
            "receiver": _receiver(result.receiver),
            "name": result.name,
            "element_result": result.element_result,
            "length": render_expr(result.length_expr),
            "source_element": result.source_element,
            "source": source_expr,
            "element": render_expr(result.element_expr),
        }
        return _get_env().get_template("slice_accessor.go.j2").render(args)

    def render_struct_type(self, struct: GoStructType) -> str:
        return _get_env().get_template("struct_type.go.j2").render(
            doc_comment=struct.doc_comment, name=struct.name, c_type=struct.c_type)

    def render(self, item) -> str:
        if isinstance(item, SynthesisResult):
            return self.render_function(item)
        if isinstance(item, SliceAccessorResult):
            return self.render_slice_accessor(item)
        if isinstance(item, GoStructType):
            return self.render_struct_type(item)
        raise TypeError(f"Cannot render {type(item).__name__}")

    def render_file(self, items: Iterable) -> str:
        blocks = [self.render(item) for item in items]
        return _get_env().get_template("file.go.j2").render(
            package=self.package,
            includes=self.includes,
            imports=_imports_for(blocks),
            blocks=blocks,
        )
