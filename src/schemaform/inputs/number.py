import logging
import math
import re
from typing import Any, Optional, Union

from ..buffered import BufferedCell, Update
from ..schema import UNSET
from .base import Field, InputRenderer, RenderContext

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_INT_RE = re.compile(r'[+-]?\d+')


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse typed text into a number, or None if it is not a complete finite number.

    Integral results come back as int, so "12." parses to 12.
    """
    s = text.strip()
    if not _NUMBER_RE.fullmatch(s):
        return None
    if _INT_RE.fullmatch(s):
        try:
            return int(s)
        except ValueError:
            # past the interpreter's int/str digit limit
            return None
    n = float(s)
    if not math.isfinite(n):
        return None
    return int(n) if n.is_integer() else n


def format_number(value: Any) -> str:
    if value is None or value is UNSET:
        return ''
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    try:
        return str(value)
    except ValueError:
        return ''


class NumberFieldState:
    """Buffered text of one number field; survives re-renders of the form."""

    def __init__(self, text: str, ctx: RenderContext):
        self.field: Optional[Field] = None
        self.cell: BufferedCell[str] = BufferedCell(text, self._commit, ctx.scheduler, ctx.delay)

    def _commit(self, update: Update) -> None:
        text = update(self.cell.external)
        if text.strip() == '':
            number = UNSET
        else:
            number = parse_number(text)
            if number is None:
                # incomplete text such as "-" or "1e" stays local
                logger.debug(f"Not committing non-numeric text {text!r}")
                return
        if self.field is not None:
            self.field.propose(lambda prev: number)

    def flush(self) -> bool:
        return self.cell.flush()

    def cancel(self) -> None:
        self.cell.cancel()


class NumberInput(InputRenderer):
    types = ('number', 'integer')

    def render(self, ctx: RenderContext, field: Field) -> Any:
        text = format_number(field.value)
        state = ctx.field_state(field, lambda: NumberFieldState(text, ctx))
        state.field = field
        state.cell.receive(text)

        local = state.cell.value
        if not local.strip():
            # empty text checks as 0
            candidate = 0
        else:
            candidate = parse_number(local)
            if candidate is None:
                candidate = math.nan

        def on_edit(new_text: str) -> None:
            state.cell.set(lambda prev: new_text)

        return ctx.kit.text_input(
            key=field.key,
            label=field.label,
            value=local,
            on_edit=on_edit if field.on_change is not None else None,
            error=ctx.error_for(field, candidate),
        )
