from .type_info import TypeDescriptor
from .type_mapper import DEFAULT_RULES, MappingRules, resolve

__all__ = [
    'DEFAULT_RULES',
    'MappingRules',
    'TypeDescriptor',
    'resolve',
]
