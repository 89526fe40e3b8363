import os
from types import SimpleNamespace

from clang.cindex import TypeKind

from gobindgen.utils import load_default_config


def find_project_root():
    path = os.path.abspath(os.path.dirname(__file__))
    while not os.path.isfile(os.path.join(path, "pyproject.toml")):
        parent = os.path.dirname(path)
        if parent == path:
            raise FileNotFoundError("pyproject.toml not found above tests/")
        path = parent
    return path


def config():
    return load_default_config()


def _declaration(name=""):
    return SimpleNamespace(type=SimpleNamespace(spelling=name), displayname=name, spelling=name)


def make_type(
    kind,
    spelling="",
    *,
    pointee=None,
    canonical=None,
    declaration=None,
    element=None,
    size=None,
    named=None,
    const=False,
):
    """A stand-in for clang.cindex.Type exposing only what the mapper reads."""
    native_type = SimpleNamespace(kind=kind, spelling=spelling)
    native_type.get_pointee = lambda: pointee
    native_type.get_canonical = lambda: canonical if canonical is not None else native_type
    native_type.get_declaration = lambda: declaration if declaration is not None else _declaration()
    native_type.get_array_element_type = lambda: element
    native_type.get_array_size = lambda: size
    native_type.get_named_type = lambda: named
    native_type.is_const_qualified = lambda: const
    return native_type


def primitive(kind, spelling, *, const=False):
    return make_type(kind, spelling, const=const)


def pointer_to(pointee, spelling=None):
    return make_type(TypeKind.POINTER, spelling or f"{pointee.spelling} *", pointee=pointee)


def typedef(name, canonical, *, const=False):
    return make_type(
        TypeKind.TYPEDEF,
        f"const {name}" if const else name,
        canonical=canonical,
        declaration=_declaration(name),
        const=const,
    )


def record(name):
    return make_type(TypeKind.RECORD, f"struct {name}", declaration=_declaration(f"struct {name}"))


def opaque_typedef(name):
    """typedef struct NameImpl *Name, the way libclang hands out handles."""
    impl = record(f"{name}Impl")
    return typedef(name, pointer_to(impl))


def struct_typedef(name):
    return typedef(name, record(name))


def enum_type(name):
    declaration = SimpleNamespace(type=SimpleNamespace(spelling=f"enum {name}"), displayname=name, spelling=name)
    return make_type(TypeKind.ENUM, f"enum {name}", declaration=declaration)


def const_array(element, size):
    return make_type(TypeKind.CONSTANTARRAY, f"{element.spelling} [{size}]", element=element, size=size)


def make_argument(name, native_type):
    return SimpleNamespace(displayname=name, spelling=name, type=native_type)


def _location(line=1):
    return SimpleNamespace(file="fake.h", line=line, offset=line * 100)


def make_function(name, result_type, arguments=(), raw_comment=None):
    return SimpleNamespace(
        spelling=name,
        location=_location(),
        result_type=result_type,
        get_arguments=lambda: list(arguments),
        raw_comment=raw_comment,
    )


def int_type():
    return primitive(TypeKind.INT, "int")


def uint_type():
    return primitive(TypeKind.UINT, "unsigned int")


def const_char_pointer():
    return pointer_to(primitive(TypeKind.CHAR_S, "const char", const=True), "const char *")


def cxstring():
    return typedef("CXString", record("CXString"))


def make_field(name, native_type, raw_comment=None):
    return SimpleNamespace(spelling=name, type=native_type, raw_comment=raw_comment, location=_location())


def make_struct_node(name):
    return SimpleNamespace(spelling=name, location=_location())
