import os
from typing import Iterable, Optional

from clang.cindex import TypeKind

from gobindgen import logging as gobindgen_logging
from gobindgen.clang_parser import (EnumInfo, FieldInfo, FunctionInfo,
                                    HeaderParser, StructInfo)
from gobindgen.doc_comments import clean_doxygen_comment
from gobindgen.emitter import GoEmitter, GoStructType
from gobindgen.errors import GenerationError, MalformedDeclaration
from gobindgen.generator_types import (DeclarationResult, GenerationOutcome,
                                       GenerationReport)
from gobindgen.naming import derive_array_name, receiver_name
from gobindgen.synthesizer import (FunctionSynthesizer,
                                   MemberGetterSynthesizer, ReceiverDescriptor,
                                   SliceAccessorSynthesizer)
from gobindgen.type_mapper import MappingRules, TypeDescriptor, resolve
from gobindgen.type_mapper.type_info import GO_POINTER

logger = gobindgen_logging.get_logger(__name__)


def find_count_field(member_name: str, sibling_names: Iterable[str]) -> Optional[str]:
    """Sibling whose derived array name matches ``member_name``, ignoring case."""
    for sibling in sibling_names:
        if sibling == member_name:
            continue
        derived = derive_array_name(sibling)
        if derived and derived.lower() == member_name.lower():
            return sibling
    return None


def _is_slice_candidate(descriptor: TypeDescriptor) -> bool:
    if descriptor.pointer_depth not in (1, 2):
        return False
    if descriptor.is_native_string or descriptor.is_function_pointer:
        return False
    return descriptor.target_name != GO_POINTER or descriptor.pointer_depth == 2


class BindingGenerator:
    """Turns a stream of declarations into a GenerationReport.

    Every declaration is generated on its own. A GenerationError marks that
    declaration as failed and the batch goes on, unless ``fail_fast`` is set.
    """

    def __init__(
        self,
        function_synthesizer: FunctionSynthesizer,
        *,
        rules: MappingRules,
        boolean_prefixes: Iterable[str] = ("has", "is"),
        skip_functions: Iterable[str] = (),
        slice_members: Optional[dict[str, str]] = None,
        fail_fast: bool = False,
    ):
        self.function_synthesizer = function_synthesizer
        self.member_synthesizer = MemberGetterSynthesizer(boolean_prefixes)
        self.slice_synthesizer = SliceAccessorSynthesizer()
        self.rules = rules
        self.skip_functions = set(skip_functions)
        self.slice_members = slice_members or {}
        self.fail_fast = fail_fast

    @classmethod
    def from_config(cls, config: dict, *, fail_fast: Optional[bool] = None) -> "BindingGenerator":
        generate_cfg = config.get("generate", {})
        if fail_fast is None:
            fail_fast = generate_cfg.get("fail_fast", False)
        return cls(
            FunctionSynthesizer.from_config(config),
            rules=MappingRules.from_config(config),
            boolean_prefixes=generate_cfg.get("boolean_prefixes", ("has", "is")),
            skip_functions=generate_cfg.get("skip_functions", ()),
            slice_members=generate_cfg.get("slice_members", {}),
            fail_fast=fail_fast,
        )

    def generate(self, declarations: Iterable) -> GenerationReport:
        report = GenerationReport()
        for declaration in declarations:
            report.add(self.generate_declaration(declaration))
        logger.info("Generation finished: %s", report.summary().splitlines()[0])
        return report

    def generate_declaration(self, declaration) -> DeclarationResult:
        if isinstance(declaration, EnumInfo):
            logger.debug("Skipping enum %s", declaration.name)
            return self._skipped(declaration)
        if isinstance(declaration, FunctionInfo) and declaration.name in self.skip_functions:
            logger.info("Skipping function %s (configured)", declaration.name)
            return self._skipped(declaration)
        if isinstance(declaration, StructInfo) and declaration.name in self.rules.disposable_string_types:
            # wrapped by the hand-written cxstring type
            logger.debug("Skipping disposable string struct %s", declaration.name)
            return self._skipped(declaration)

        try:
            if isinstance(declaration, FunctionInfo):
                items = (self.function_synthesizer.generate(declaration.node),)
            elif isinstance(declaration, StructInfo):
                items = self.generate_struct(declaration)
            else:
                raise TypeError(f"Unsupported declaration {declaration!r}")
        except GenerationError as e:
            if self.fail_fast:
                raise
            logger.error("Failed to generate %s %s: %s", declaration.kind.name.lower(), declaration.name, e)
            return DeclarationResult(
                name=declaration.name,
                kind=declaration.kind,
                outcome=GenerationOutcome.FAILURE,
                error=str(e),
            )

        logger.debug("Generated %d item(s) for %s", len(items), declaration.name)
        return DeclarationResult(
            name=declaration.name,
            kind=declaration.kind,
            outcome=GenerationOutcome.SUCCESS,
            items=tuple(items),
        )

    @staticmethod
    def _skipped(declaration) -> DeclarationResult:
        return DeclarationResult(
            name=declaration.name,
            kind=declaration.kind,
            outcome=GenerationOutcome.SKIPPED,
        )

    def generate_struct(self, struct: StructInfo) -> list:
        struct_type = resolve(struct.type, self.rules)
        receiver = ReceiverDescriptor(receiver_name(struct_type.target_name), struct_type)
        items: list = [GoStructType(struct_type.target_name, struct.c_type, clean_doxygen_comment(struct.raw_comment))]

        sibling_names = struct.field_names()
        for field in struct.fields:
            if not field.name:
                raise MalformedDeclaration(struct.name, "unnamed member")
            if field.type is None or field.type.kind == TypeKind.INVALID:
                raise MalformedDeclaration(f"{struct.name}.{field.name}", "member has no type")
            item = self._generate_member(struct, receiver, field, sibling_names)
            if item is not None:
                items.append(item)
        return items

    def _generate_member(self, struct: StructInfo, receiver: ReceiverDescriptor, field: FieldInfo, sibling_names):
        descriptor = resolve(field.type, self.rules)
        doc_comment = clean_doxygen_comment(field.raw_comment)

        length_field = self.slice_members.get(f"{struct.name}.{field.name}")
        if length_field is None and descriptor.fixed_array_length is None and _is_slice_candidate(descriptor):
            length_field = find_count_field(field.name, sibling_names)

        if descriptor.fixed_array_length is not None or length_field is not None:
            return self.slice_synthesizer.synthesize(
                receiver,
                field.name,
                descriptor,
                length_field=length_field,
                sibling_fields=sibling_names,
                struct_name=struct.name,
                doc_comment=doc_comment,
            )
        if descriptor.is_function_pointer:
            logger.debug("Skipping function pointer member %s.%s", struct.name, field.name)
            return None
        return self.member_synthesizer.synthesize(receiver, field.name, descriptor, doc_comment=doc_comment)


def render_report(report: GenerationReport, config: dict, header: str, package: Optional[str] = None) -> str:
    generate_cfg = config.get("generate", {})
    includes = [f'"{os.path.basename(header)}"', *generate_cfg.get("cgo_includes", [])]
    emitter = GoEmitter(package or generate_cfg.get("package", "clang"), includes)
    return emitter.render_file(report.items)


def generate_header(
    header: str,
    config: dict,
    *,
    include_paths: Iterable[str] = (),
    fail_fast: Optional[bool] = None,
) -> GenerationReport:
    parser = HeaderParser.from_config(header, config, include_paths=list(include_paths))
    generator = BindingGenerator.from_config(config, fail_fast=fail_fast)
    return generator.generate(parser.get_declarations())
