from .go_emitter import (GoEmitter, GoStructType, go_type, render_expr,
                         render_statement)

__all__ = [
    'GoEmitter',
    'GoStructType',
    'go_type',
    'render_expr',
    'render_statement',
]
