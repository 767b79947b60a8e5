"""Widget capability interface used by the input renderers.

A kit turns display values, an error string and callbacks into opaque
rendered units. How those units look is entirely up to the kit.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence


class WidgetKit(ABC):
    """Abstract base class for all widget kits."""

    @abstractmethod
    def text_input(
        self,
        *,
        key: str,
        label: str,
        value: str,
        on_edit: Optional[Callable[[str], None]],
        error: Optional[str] = None,
        options: Optional[Sequence[Any]] = None,
        secure: bool = False,
        autocomplete: Optional[str] = None,
        lines: int = 1,
    ) -> Any:
        """Return a text control.

        When ``options`` is given the control is a picker restricted to those
        values. ``secure`` masks the text. ``lines`` > 1 asks for a multi-line
        control (ignored when ``secure`` is set).
        """
        pass

    @abstractmethod
    def checkbox(
        self,
        *,
        key: str,
        label: str,
        checked: bool,
        on_toggle: Optional[Callable[[], None]],
        error: Optional[str] = None,
    ) -> Any:
        """Return a checkbox whose label toggles it as well."""
        pass

    @abstractmethod
    def button(self, *, key: str, title: str, on_press: Optional[Callable[[], None]]) -> Any:
        pass

    @abstractmethod
    def label(self, text: str, *, key: str = '') -> Any:
        pass

    @abstractmethod
    def container(self, children: Sequence[Any], *, key: str = '', row: bool = False) -> Any:
        """Group rendered units. ``None`` children render nothing and are skipped."""
        pass
