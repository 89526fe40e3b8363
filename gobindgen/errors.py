class GenerationError(ValueError):
    """Base class for structural mismatches between a native declaration
    and the mapping rules. These are never retried."""


class UnhandledTypeKind(GenerationError):
    def __init__(self, spelling: str, kind: str):
        super().__init__(f"unhandled type {spelling!r} of kind {kind!r}")
        self.spelling = spelling
        self.kind = kind


class UnresolvedArrayLength(GenerationError):
    def __init__(self, struct_name: str, member_name: str, length_field: str | None = None):
        if length_field:
            detail = f"count field {length_field!r} is not a member of {struct_name!r}"
        else:
            detail = "no count field could be derived"
        super().__init__(f"cannot determine the length of {struct_name}.{member_name}: {detail}")
        self.struct_name = struct_name
        self.member_name = member_name
        self.length_field = length_field


class MalformedDeclaration(GenerationError):
    def __init__(self, name: str, detail: str):
        super().__init__(f"malformed declaration {name!r}: {detail}")
        self.name = name
        self.detail = detail
