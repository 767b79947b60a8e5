from typing import Any

from .base import Field, InputRenderer, RenderContext


class BooleanInput(InputRenderer):
    """Checkbox; an absent value shows unchecked and toggles to True."""

    types = ('boolean',)

    def render(self, ctx: RenderContext, field: Field) -> Any:
        def toggle() -> None:
            field.propose(lambda prev: not prev)

        return ctx.kit.checkbox(
            key=field.key,
            label=field.label,
            checked=bool(field.value),
            on_toggle=toggle if field.on_change is not None else None,
            error=ctx.error_for(field, field.value),
        )
