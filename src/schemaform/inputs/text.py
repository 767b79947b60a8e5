from typing import Any, Optional

from ..schema import UNSET
from .base import DEFAULT_LINE_CHARS, Field, InputRenderer, RenderContext

AUTOCOMPLETE = {
    'email': 'email',
    'password': 'current-password',
}


def display_text(value: Any) -> str:
    if value is None or value is UNSET:
        return ''
    return str(value)


def line_count(max_length: Optional[int], line_chars: int = DEFAULT_LINE_CHARS) -> int:
    """Lines to show for a field of max_length characters: one per started block."""
    return max(((max_length or 1) - 1) // line_chars + 1, 1)


class TextInput(InputRenderer):
    """Free text, or a picker when the schema has an enum.

    Clearing the text commits None rather than an empty string.
    """

    types = ('string',)

    def render(self, ctx: RenderContext, field: Field) -> Any:
        schema = field.schema

        def on_edit(text: str) -> None:
            field.propose(lambda prev: text or None)

        return ctx.kit.text_input(
            key=field.key,
            label=field.label,
            value=display_text(field.value),
            on_edit=on_edit if field.on_change is not None else None,
            error=ctx.error_for(field, field.value),
            options=list(schema.enum) if schema.enum is not None else None,
            secure=schema.format == 'password',
            autocomplete=AUTOCOMPLETE.get(schema.format or ''),
            lines=line_count(schema.max_length, ctx.line_chars),
        )
