"""Input renderers, one per schema type.

All renderers inherit from InputRenderer and are looked up by type through
an InputRegistry.
"""
from .base import Field, InputRenderer, RenderContext
from .boolean import BooleanInput
from .composite import ArrayInput, NullInput, ObjectInput
from .number import NumberInput
from .registry import InputRegistry, get_default_registry
from .text import TextInput

__all__ = [
    'Field',
    'InputRenderer',
    'RenderContext',
    'InputRegistry',
    'get_default_registry',
    'TextInput',
    'NumberInput',
    'BooleanInput',
    'ObjectInput',
    'ArrayInput',
    'NullInput',
]
