"""Shared types for input renderers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from ..buffered import DEFAULT_DELAY, Update
from ..scheduling import Scheduler
from ..schema import SchemaFragment
from ..validation import ValidatorCache, resolve_error
from ..widgets.base import WidgetKit

if TYPE_CHECKING:
    from .registry import InputRegistry

OnChange = Callable[[Update], Any]

DEFAULT_LINE_CHARS = 128


@dataclass(frozen=True)
class Field:
    """One schema fragment bound to its current value and change callback."""

    name: str
    schema: SchemaFragment
    value: Any
    on_change: Optional[OnChange] = None
    path: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return '.'.join(self.path)

    @property
    def label(self) -> str:
        return self.schema.label(self.name)

    def child(self, name: str, schema: SchemaFragment, value: Any, on_change: Optional[OnChange]) -> 'Field':
        return Field(name, schema, value, on_change, self.path + (name,))

    def propose(self, update: Update) -> None:
        if self.on_change is not None:
            self.on_change(update)


@dataclass
class RenderContext:
    """Everything a renderer needs besides its field.

    Also holds per-field state (keyed by field path) that must outlive a
    single render pass, and the errors reported during the last pass.
    """

    kit: WidgetKit
    registry: 'InputRegistry'
    validators: ValidatorCache
    scheduler: Optional[Scheduler] = None
    delay: float = DEFAULT_DELAY
    messages: Mapping[str, str] = field(default_factory=dict)
    line_chars: int = DEFAULT_LINE_CHARS
    errors: dict[str, str] = field(default_factory=dict)
    field_states: dict[tuple[str, ...], Any] = field(default_factory=dict)
    _visited: set = field(default_factory=set, repr=False)

    def dispatch(self, f: Field) -> Any:
        return self.registry.dispatch(self, f)

    def error_for(self, f: Field, value: Any) -> Optional[str]:
        message = resolve_error(self.validators.validate(f.schema, value), self.messages)
        if message:
            self.errors[f.key] = message
        return message

    def field_state(self, f: Field, factory: Callable[[], Any]) -> Any:
        state = self.field_states.get(f.path)
        if state is None:
            state = factory()
            self.field_states[f.path] = state
        self._visited.add(f.path)
        return state

    def begin_pass(self) -> None:
        self.errors = {}
        self._visited = set()

    def end_pass(self) -> None:
        # fields that were not rendered this pass are gone (removed rows, etc.)
        for path in [p for p in self.field_states if p not in self._visited]:
            state = self.field_states.pop(path)
            cancel = getattr(state, 'cancel', None)
            if cancel is not None:
                cancel()


class InputRenderer(ABC):
    """Abstract base class for all input renderers."""

    types: tuple[str, ...] = ()

    @abstractmethod
    def render(self, ctx: RenderContext, field: Field) -> Any:
        """Render field through ctx.kit and return the rendered unit (or None)."""
        pass
