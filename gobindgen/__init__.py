from .generator import BindingGenerator, generate_header, render_report
from .generator_types import (DeclarationResult, GenerationOutcome,
                              GenerationReport)

__all__ = [
    'BindingGenerator',
    'DeclarationResult',
    'GenerationOutcome',
    'GenerationReport',
    'generate_header',
    'render_report',
]
