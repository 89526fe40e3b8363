from dataclasses import replace
from typing import Iterable

from gobindgen import logging as gobindgen_logging
from gobindgen.data_types import ReturnShape
from gobindgen.naming import upper_first
from gobindgen.type_mapper import TypeDescriptor
from gobindgen.type_mapper.type_info import (DISPOSABLE_STRING, GO_BOOL,
                                             GO_POINTER, GO_STRING)

from .descriptors import (FunctionDescriptor, ReceiverDescriptor, Signature,
                          SynthesisResult)
from .function_synthesizer import coerce_boolean_return
from .statements import (AddressOf, Call, CompositeLit, Deref, Expr,
                         FunctionBuilder, Ident, IntLit, NotEqual, Selector,
                         c_call, cast, member, method_call)

logger = gobindgen_logging.get_logger(__name__)

VALUE_VAR = "value"


class MemberGetterSynthesizer:
    """Getter methods for plain (non-array) struct members."""

    def __init__(self, boolean_prefixes: Iterable[str] = ("has", "is")):
        self.boolean_prefixes = tuple(boolean_prefixes)

    def synthesize(
        self,
        receiver: ReceiverDescriptor,
        member_name: str,
        member_type: TypeDescriptor,
        *,
        doc_comment: str = "",
    ) -> SynthesisResult:
        return_type = coerce_boolean_return(member_name, member_type, self.boolean_prefixes)
        source: Expr = Selector(member(receiver.name, "c"), member_name)
        builder = FunctionBuilder()
        shape = return_type.shape
        pointer = return_type.pointer_depth >= 1

        if shape == ReturnShape.BOOL:
            builder.assign(VALUE_VAR, source)
            builder.returns(NotEqual(Ident(VALUE_VAR), c_call(return_type.marshal_name, IntLit(0))))
            result = GO_BOOL
        elif shape == ReturnShape.PLAIN_STRING:
            builder.assign(VALUE_VAR, c_call("GoString", source)).returns(Ident(VALUE_VAR))
            result = GO_STRING
        elif shape == ReturnShape.DISPOSABLE_STRING:
            # the struct owns the string, so no Dispose here
            builder.assign(VALUE_VAR, CompositeLit(DISPOSABLE_STRING, (source,)))
            builder.returns(method_call(VALUE_VAR, "String"))
            result = GO_STRING
        elif shape == ReturnShape.TIMESTAMP:
            unix = Call(member("time", "Unix"), (cast("int64", source), IntLit(0)))
            builder.assign(VALUE_VAR, unix).returns(Ident(VALUE_VAR))
            result = return_type.target_name
        elif return_type.target_name == GO_POINTER:
            builder.assign(VALUE_VAR, cast(GO_POINTER, source)).returns(Ident(VALUE_VAR))
            result = GO_POINTER
        else:
            if pointer:
                source = Deref(source)
            if return_type.is_composite:
                converted: Expr = CompositeLit(return_type.target_name, (source,))
            else:
                converted = cast(return_type.target_name, source)
            builder.assign(VALUE_VAR, converted)
            if pointer:
                return_type = replace(return_type, is_pointer_composition=return_type.is_composite)
                builder.returns(AddressOf(Ident(VALUE_VAR)))
                result = "*" + return_type.target_name
            else:
                builder.returns(Ident(VALUE_VAR))
                result = return_type.target_name

        function = FunctionDescriptor(
            native_name=member_name,
            target_name=upper_first(member_name),
            return_type=return_type,
            doc_comment=doc_comment,
            receiver=receiver,
            member_name=member_name,
        )
        logger.debug("Member getter %s.%s -> %s", receiver.type.target_name, function.target_name, result)
        return SynthesisResult(
            function=function,
            signature=Signature(receiver=receiver, parameters=(), results=(result,)),
            statements=builder.build(),
        )
