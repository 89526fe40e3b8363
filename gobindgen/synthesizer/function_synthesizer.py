from dataclasses import replace
from typing import Iterable, Optional

from clang.cindex import TypeKind

from gobindgen import logging as gobindgen_logging
from gobindgen.data_types import ReturnShape
from gobindgen.doc_comments import clean_doxygen_comment
from gobindgen.errors import MalformedDeclaration
from gobindgen.naming import (escape_identifier, is_boolean_predicate,
                              method_name, receiver_name,
                              trim_function_prefix, upper_first)
from gobindgen.type_mapper import DEFAULT_RULES, MappingRules, TypeDescriptor, resolve
from gobindgen.type_mapper.type_info import (DISPOSABLE_STRING, GO_BOOL,
                                             GO_POINTER, INT16_FAMILY)

from .descriptors import (FunctionDescriptor, ParameterDescriptor,
                          ReceiverDescriptor, Signature, SynthesisResult)
from .statements import (AddressOf, Call, CompositeLit, Expr, FunctionBuilder,
                         Ident, IntLit, NotEqual, PointerType, c_call, c_ref,
                         cast, member, method_call)

logger = gobindgen_logging.get_logger(__name__)

RESULT_VAR = "o"


def coerce_boolean_return(
    name: str,
    return_type: TypeDescriptor,
    prefixes: Iterable[str] = ("has", "is"),
) -> TypeDescriptor:
    """libclang returns truth flags of has*/is* functions in an int slot."""
    if (
        is_boolean_predicate(name, prefixes)
        and return_type.target_name in INT16_FAMILY
        and return_type.pointer_depth == 0
        and not return_type.is_array
    ):
        return replace(return_type, target_name=GO_BOOL, shape=ReturnShape.BOOL)
    return return_type


def _unix_time(seconds: Expr) -> Call:
    return Call(member("time", "Unix"), (cast("int64", seconds), IntLit(0)))


def _is_valid_type(native_type) -> bool:
    return native_type is not None and native_type.kind != TypeKind.INVALID


def _is_output_pointer(native_type, descriptor: TypeDescriptor) -> bool:
    if native_type.kind != TypeKind.POINTER or descriptor.pointer_depth != 1:
        return False
    if descriptor.is_native_string or descriptor.is_function_pointer:
        return False
    if descriptor.target_name == GO_POINTER:
        return False
    return not native_type.get_pointee().is_const_qualified()


def classify_out_parameters(native_types, descriptors, *, skip_first: bool = False) -> list[bool]:
    """Mark the trailing run of writable single pointers as out-parameters."""
    flags = [False] * len(descriptors)
    first = 1 if skip_first else 0
    for i in range(len(descriptors) - 1, first - 1, -1):
        if not _is_output_pointer(native_types[i], descriptors[i]):
            break
        flags[i] = True
    return flags


def _is_pointer_input(parameter: ParameterDescriptor) -> bool:
    typ = parameter.type
    if parameter.is_out_parameter or typ.pointer_depth == 0 or typ.is_array:
        return False
    # these already travel as a single Go value
    if typ.is_native_string or typ.target_name == GO_POINTER:
        return False
    return not (typ.is_function_pointer and typ.pointer_depth == 1)


def _pointer_argument(function_name: str, parameter: ParameterDescriptor) -> Expr:
    """Call argument for a pointer the Go caller hands in, e.g. ``CXToken *``."""
    name = parameter.target_name
    typ = parameter.type
    if typ.pointer_depth == 1 and typ.shape == ReturnShape.COMPOSITE:
        return AddressOf(member(name, "c"))
    if typ.pointer_depth == 1 and typ.shape == ReturnShape.PRIMITIVE_OR_ENUM and typ.marshal_name:
        unsafe_pointer = Call(member("unsafe", "Pointer"), (Ident(name),))
        return Call(PointerType(c_ref(typ.marshal_name)), (unsafe_pointer,))
    raise MalformedDeclaration(
        function_name, f"cannot pass parameter {parameter.native_name or name} of type {typ.native_name!r}")


class FunctionSynthesizer:
    def __init__(
        self,
        rules: MappingRules = DEFAULT_RULES,
        *,
        function_prefix: str = "clang_",
        boolean_prefixes: Iterable[str] = ("has", "is"),
        receiver_promotion: bool = True,
        out_parameters: Optional[dict[str, list[str]]] = None,
    ):
        self.rules = rules
        self.function_prefix = function_prefix
        self.boolean_prefixes = tuple(boolean_prefixes)
        self.receiver_promotion = receiver_promotion
        self.out_parameters = out_parameters or {}

    @classmethod
    def from_config(cls, config: dict) -> "FunctionSynthesizer":
        generate_cfg = config.get("generate", {}) if config else {}
        return cls(
            MappingRules.from_config(config),
            function_prefix=generate_cfg.get("function_prefix", "clang_"),
            boolean_prefixes=generate_cfg.get("boolean_prefixes", ("has", "is")),
            receiver_promotion=generate_cfg.get("receiver_promotion", True),
            out_parameters=generate_cfg.get("out_parameters", {}),
        )

    def generate(self, node) -> SynthesisResult:
        return self.synthesize(self.describe(node))

    def describe(self, node) -> FunctionDescriptor:
        """Map a FUNCTION_DECL cursor into a FunctionDescriptor.

        Raises GenerationError subclasses when a type cannot be mapped.
        """
        native_name = node.spelling
        if not _is_valid_type(node.result_type):
            raise MalformedDeclaration(native_name, "missing result type")

        short_name = trim_function_prefix(native_name, self.function_prefix)
        return_type = coerce_boolean_return(
            short_name, resolve(node.result_type, self.rules), self.boolean_prefixes)

        arguments = list(node.get_arguments())
        native_types = []
        descriptors = []
        for i, argument in enumerate(arguments):
            if not _is_valid_type(argument.type):
                raise MalformedDeclaration(native_name, f"argument {i} has no type")
            native_types.append(argument.type)
            descriptors.append(resolve(argument.type, self.rules))

        receiver = None
        if self.receiver_promotion and descriptors:
            receiver = self._receiver_for(descriptors[0])

        if native_name in self.out_parameters:
            wanted = set(self.out_parameters[native_name])
            out_flags = [argument.displayname in wanted for argument in arguments]
        else:
            out_flags = classify_out_parameters(
                native_types, descriptors, skip_first=receiver is not None)

        parameters = []
        used_names = {RESULT_VAR}
        for i, (argument, descriptor, is_out) in enumerate(zip(arguments, descriptors, out_flags)):
            if i == 0 and receiver is not None:
                name = receiver.name
            elif argument.displayname:
                name = escape_identifier(argument.displayname)
            else:
                name = receiver_name(descriptor.target_name)
            while name in used_names:
                name += "_"
            used_names.add(name)
            parameters.append(ParameterDescriptor(
                native_name=argument.displayname,
                target_name=name,
                type=descriptor,
                is_out_parameter=is_out,
            ))

        if receiver is not None:
            target_name = method_name(
                short_name, receiver.type.target_name, return_type.result_name, self.rules.type_prefixes)
        else:
            target_name = upper_first(short_name)

        return FunctionDescriptor(
            native_name=native_name,
            target_name=target_name,
            return_type=return_type,
            parameters=tuple(parameters),
            doc_comment=clean_doxygen_comment(node.raw_comment),
            receiver=receiver,
        )

    def _receiver_for(self, descriptor: TypeDescriptor) -> Optional[ReceiverDescriptor]:
        if descriptor.shape != ReturnShape.COMPOSITE or descriptor.pointer_depth != 0:
            return None
        return ReceiverDescriptor(receiver_name(descriptor.target_name), descriptor)

    def synthesize(self, function: FunctionDescriptor) -> SynthesisResult:
        logger.debug("Synthesizing %s as %s", function.native_name, function.target_name)
        builder = FunctionBuilder()

        parameters = list(function.parameters)
        receiver = function.receiver if parameters else None
        if receiver is not None:
            # the first parameter is bound as the receiver
            parameters[0] = replace(parameters[0], target_name=receiver.name)

        public_parameters = []
        out_results: list[Expr] = []
        out_types: list[str] = []
        for i, parameter in enumerate(parameters):
            if i == 0 and receiver is not None:
                continue
            if not parameter.is_out_parameter:
                public_parameters.append(parameter)
                continue

            out_types.append(parameter.type.result_name)
            out_results.append(self._declare_out_parameter(parameter, builder))

        if out_results:
            builder.blank()

        arguments = []
        converted = False
        for parameter in parameters:
            argument, was_converted = self._call_argument(function.native_name, parameter, builder)
            arguments.append(argument)
            converted = converted or was_converted
        if converted:
            builder.blank()

        call = c_call(function.native_name, *arguments)
        result_types = self._emit_return(function.return_type, call, out_results, builder)

        signature = Signature(
            receiver=receiver,
            parameters=tuple(public_parameters),
            results=tuple(result_types + out_types),
        )
        return SynthesisResult(function=function, signature=signature, statements=builder.build())

    def _declare_out_parameter(self, parameter: ParameterDescriptor, builder: FunctionBuilder) -> Expr:
        name = parameter.target_name
        typ = parameter.type

        if typ.is_primitive and typ.marshal_name:
            builder.declare(name, c_ref(typ.marshal_name))
        else:
            builder.declare(name, Ident(typ.target_name))

        if typ.is_disposable_string:
            builder.defer(method_call(name, "Dispose"))
            return method_call(name, "String")
        if typ.shape == ReturnShape.TIMESTAMP:
            return _unix_time(Ident(name))
        if typ.is_primitive and typ.marshal_name:
            return cast(typ.target_name, Ident(name))
        return Ident(name)

    def _call_argument(
        self,
        function_name: str,
        parameter: ParameterDescriptor,
        builder: FunctionBuilder,
    ) -> tuple[Expr, bool]:
        name = parameter.target_name
        typ = parameter.type
        converted = False

        if _is_pointer_input(parameter):
            return _pointer_argument(function_name, parameter), converted

        if typ.is_native_string and not parameter.is_out_parameter:
            c_name = "c_" + name
            builder.assign(c_name, c_call("CString", Ident(name)))
            builder.defer(c_call("free", Call(member("unsafe", "Pointer"), (Ident(c_name),))))
            argument: Expr = Ident(c_name)
            converted = True
        elif typ.is_disposable_string or typ.is_composite:
            argument = member(name, "c")
        elif parameter.is_out_parameter or not typ.marshal_name:
            # out-parameters are already declared with their C type
            argument = Ident(name)
        else:
            argument = c_call(typ.marshal_name, Ident(name))

        if parameter.is_out_parameter:
            argument = AddressOf(argument)
        return argument, converted

    def _emit_return(
        self,
        return_type: TypeDescriptor,
        call: Call,
        out_results: list[Expr],
        builder: FunctionBuilder,
    ) -> list[str]:
        shape = return_type.shape

        if shape == ReturnShape.VOID:
            builder.call(call)
            if out_results:
                builder.blank().returns(*out_results)
            return []

        if shape == ReturnShape.BOOL:
            builder.assign(RESULT_VAR, call).blank()
            zero = c_call(return_type.marshal_name, IntLit(0))
            builder.returns(NotEqual(Ident(RESULT_VAR), zero), *out_results)
            return [GO_BOOL]

        if shape == ReturnShape.PLAIN_STRING:
            builder.returns(c_call("GoString", call), *out_results)
            return [return_type.target_name]

        if shape == ReturnShape.DISPOSABLE_STRING:
            builder.assign(RESULT_VAR, CompositeLit(DISPOSABLE_STRING, (call,)))
            builder.defer(method_call(RESULT_VAR, "Dispose")).blank()
            builder.returns(method_call(RESULT_VAR, "String"), *out_results)
            return [return_type.result_name]

        if shape == ReturnShape.TIMESTAMP:
            builder.returns(_unix_time(call), *out_results)
            return [return_type.target_name]

        # structs are literals, everything else is a cast
        if shape == ReturnShape.COMPOSITE:
            converted: Expr = CompositeLit(return_type.target_name, (call,))
        else:
            converted = cast(return_type.target_name, call)

        if out_results:
            builder.assign(RESULT_VAR, converted).blank()
            builder.returns(Ident(RESULT_VAR), *out_results)
        else:
            builder.returns(converted)
        return [return_type.target_name]
