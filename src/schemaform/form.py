"""Root form controller."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from .buffered import BufferedCell, Update
from .config import get_debounce_ms, get_error_messages, get_line_chars
from .inputs.base import Field, RenderContext
from .inputs.registry import InputRegistry, get_default_registry
from .scheduling import Scheduler
from .schema import UNSET, SchemaFragment, load_schema
from .validation import ValidatorCache, get_default_cache
from .widgets.base import WidgetKit
from .widgets.tree import TreeKit

logger = logging.getLogger(__name__)


class JsonSchemaForm:
    """Editable form for a value described by a JSON schema.

    The host owns the value and passes ``on_change``, which receives update
    functions ``prev -> next``. The form buffers edits in a BufferedCell and
    commits them through ``on_change`` after the debounce delay (or on
    flush()). Without ``on_change`` the form is read-only.

    Call render() after every edit or upstream change to get a fresh widget
    tree; pass upstream values in through receive().

    Schema configuration errors (SchemaConfigError) raised while rendering
    propagate to the caller.
    """

    def __init__(
        self,
        name: str,
        schema: SchemaFragment | Mapping[str, Any],
        value: Any = UNSET,
        on_change: Optional[Callable[[Update], Any]] = None,
        *,
        kit: Optional[WidgetKit] = None,
        scheduler: Optional[Scheduler] = None,
        delay: Optional[float] = None,
        registry: Optional[InputRegistry] = None,
        validators: Optional[ValidatorCache] = None,
        messages: Optional[Mapping[str, str]] = None,
        line_chars: Optional[int] = None,
    ):
        self.name = name
        self.schema = schema if isinstance(schema, SchemaFragment) else load_schema(schema)
        if delay is None:
            delay = get_debounce_ms() / 1000.0
        self._on_change = on_change
        self._cell: BufferedCell[Any] = BufferedCell(
            value, self._commit if on_change is not None else None, scheduler, delay
        )
        self.ctx = RenderContext(
            kit=kit or TreeKit(),
            registry=registry or get_default_registry(),
            validators=validators or get_default_cache(),
            scheduler=scheduler,
            delay=delay,
            messages=get_error_messages() if messages is None else messages,
            line_chars=line_chars or get_line_chars(),
        )

    @property
    def value(self) -> Any:
        """The buffered (latest local) value."""
        return self._cell.value

    @property
    def errors(self) -> dict[str, str]:
        """First error per field key, as reported by the last render()."""
        return dict(self.ctx.errors)

    @property
    def cell(self) -> BufferedCell[Any]:
        return self._cell

    def _commit(self, update: Update) -> None:
        logger.debug(f"Form '{self.name}' committing to host")
        self._on_change(update)

    def receive(self, value: Any) -> bool:
        """Report the host's current value; pending local edits take precedence."""
        return self._cell.receive(value)

    def render(self) -> Any:
        self.ctx.begin_pass()
        on_change = self._cell.set if self._on_change is not None else None
        node = self.ctx.dispatch(Field(self.name, self.schema, self._cell.value, on_change))
        self.ctx.end_pass()
        return node

    def flush(self) -> bool:
        """Commit every pending edit now, field buffers first, then the form value."""
        flushed = False
        for state in list(self.ctx.field_states.values()):
            flush = getattr(state, 'flush', None)
            if flush is not None and flush():
                flushed = True
        if self._cell.flush():
            flushed = True
        return flushed

    def cancel(self) -> None:
        """Drop every pending edit without committing."""
        for state in list(self.ctx.field_states.values()):
            state.cancel()
        self._cell.cancel()


class ValueHolder:
    """Minimal host-side value store: call it with an update to apply it."""

    def __init__(self, value: Any = UNSET):
        self.value = value
        self.history: list[Any] = []

    def __call__(self, update: Update) -> None:
        self.value = update(self.value)
        self.history.append(self.value)


def collect_errors(schema: SchemaFragment | Mapping[str, Any], value: Any, name: str = '') -> dict[str, str]:
    """Render a read-only form headlessly and return the first error per field key."""
    form = JsonSchemaForm(name, schema, value, kit=TreeKit(), delay=0.0)
    form.render()
    return form.errors
