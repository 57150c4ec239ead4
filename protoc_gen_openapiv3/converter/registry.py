"""Component registry for schemas produced during one conversion.

This module provides the ComponentRegistry class, the document-scoped map from
component name to schema that backs every ``$ref`` the converter emits.
"""

import logging
from collections.abc import Iterator

from protoc_gen_openapiv3.openapi import Reference, Schema

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = '#/components/schemas/'


def schema_ref(name: str) -> Reference:
    """Build a ``$ref`` pointing at a component schema."""
    return Reference(ref=f'{SCHEMA_REF_PREFIX}{name}')


class ComponentRegistry:
    """Registry of named component schemas for one document.

    Names are registered at most once; insertion order is preserved so the
    emitted ``components.schemas`` section is deterministic. One registry
    lives exactly as long as one conversion call.

    Example:
        >>> registry = ComponentRegistry()
        >>> registry.register('User', user_schema)
        >>> registry.reference('User').ref
        '#/components/schemas/User'
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._schemas: dict[str, Schema] = {}

    def register(self, name: str, schema: Schema) -> Schema:
        """Register a schema under ``name``.

        Args:
            name: The component name (package qualification already stripped).
            schema: The schema body.

        Returns:
            The registered schema.

        Raises:
            ValueError: If a schema with the same name is already registered.
        """
        if name in self._schemas:
            raise ValueError(f"Schema '{name}' is already registered")

        logger.debug(f'Registering component schema {name}')
        self._schemas[name] = schema
        return schema

    def has(self, name: str) -> bool:
        """Check if a schema is registered under ``name``."""
        return name in self._schemas

    def get(self, name: str) -> Schema | None:
        """Get the schema registered under ``name``, if any."""
        return self._schemas.get(name)

    def reference(self, name: str) -> Reference:
        """Build a ``$ref`` to ``name``, whether or not it is registered yet."""
        return schema_ref(name)

    def names(self) -> list[str]:
        """Get registered names in registration order."""
        return list(self._schemas)

    def as_dict(self) -> dict[str, Schema]:
        """Get a copy of all registered schemas in registration order."""
        return dict(self._schemas)

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)
