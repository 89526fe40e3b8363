from .descriptors import (FunctionDescriptor, LengthSource,
                          ParameterDescriptor, ReceiverDescriptor, Signature,
                          SliceAccessorDescriptor, SliceAccessorResult,
                          SynthesisResult)
from .function_synthesizer import FunctionSynthesizer, coerce_boolean_return
from .member_synthesizer import MemberGetterSynthesizer
from .slice_synthesizer import SliceAccessorSynthesizer

__all__ = [
    'FunctionDescriptor',
    'FunctionSynthesizer',
    'LengthSource',
    'MemberGetterSynthesizer',
    'ParameterDescriptor',
    'ReceiverDescriptor',
    'Signature',
    'SliceAccessorDescriptor',
    'SliceAccessorResult',
    'SliceAccessorSynthesizer',
    'SynthesisResult',
    'coerce_boolean_return',
]
