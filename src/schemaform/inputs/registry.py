"""Type dispatcher: one input renderer per schema type."""

import logging
from typing import Any

from ..schema import JSON_TYPES, SchemaConfigError
from .base import Field, InputRenderer, RenderContext

logger = logging.getLogger(__name__)


class InputRegistry:
    """Central registry mapping schema types to input renderers.

    Dispatch is keyed by the closed set of JSON types; a type without a
    renderer is a configuration error.
    """

    def __init__(self):
        self._renderers: dict[str, InputRenderer] = {}

    def register(self, type_name: str, renderer: InputRenderer, replace: bool = False) -> None:
        """Register a renderer for one schema type.

        Args:
            type_name: One of the JSON schema type names.
            renderer: The renderer instance.
            replace: Overwrite an existing registration instead of skipping.

        Raises:
            ValueError: If type_name is not a JSON schema type.
        """
        if type_name not in JSON_TYPES:
            raise ValueError(f"Unknown schema type '{type_name}'")
        if type_name in self._renderers and not replace:
            logger.warning(f"Input for type '{type_name}' is already registered. Skipping.")
            return
        self._renderers[type_name] = renderer
        logger.debug(f"Registered input {type(renderer).__name__} for type '{type_name}'")

    def register_renderer(self, renderer: InputRenderer, replace: bool = False) -> None:
        """Register a renderer for every type it declares in `types`."""
        for type_name in renderer.types:
            self.register(type_name, renderer, replace=replace)

    def get(self, type_name: str) -> InputRenderer | None:
        return self._renderers.get(type_name)

    def get_types(self) -> list[str]:
        return list(self._renderers.keys())

    def unregister(self, type_name: str) -> bool:
        if type_name in self._renderers:
            del self._renderers[type_name]
            logger.debug(f"Unregistered input for type '{type_name}'")
            return True
        return False

    def clear(self) -> None:
        self._renderers.clear()

    def dispatch(self, ctx: RenderContext, field: Field) -> Any:
        """Render field with the renderer registered for its schema type.

        Raises:
            SchemaConfigError: If the type is missing or has no renderer.
        """
        type_name = getattr(field.schema, 'type', None)
        renderer = self._renderers.get(type_name) if isinstance(type_name, str) else None
        if renderer is None:
            fragment_id = getattr(field.schema, 'fragment_id', field.key or '#')
            raise SchemaConfigError(f"no input registered for type {type_name!r}", fragment_id)
        return renderer.render(ctx, field)

    def register_default_inputs(self) -> None:
        """Register the built-in renderers for all JSON types."""
        from .boolean import BooleanInput
        from .composite import ArrayInput, NullInput, ObjectInput
        from .number import NumberInput
        from .text import TextInput

        self.register_renderer(TextInput())
        self.register_renderer(NumberInput())
        self.register_renderer(BooleanInput())
        self.register_renderer(ObjectInput())
        self.register_renderer(ArrayInput())
        self.register_renderer(NullInput())

        logger.debug(f"Registered inputs for {len(self._renderers)} types")


# Global default registry instance
_default_registry: InputRegistry | None = None


def get_default_registry() -> InputRegistry:
    """Get or create the default global input registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = InputRegistry()
        _default_registry.register_default_inputs()
    return _default_registry
