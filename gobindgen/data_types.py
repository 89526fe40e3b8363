from enum import Enum, auto


class DeclarationKind(Enum):
    FUNCTION = auto()
    STRUCT = auto()
    ENUM = auto()


class ReturnShape(Enum):
    VOID = auto()
    BOOL = auto()
    PLAIN_STRING = auto()
    DISPOSABLE_STRING = auto()
    TIMESTAMP = auto()
    COMPOSITE = auto()
    PRIMITIVE_OR_ENUM = auto()
