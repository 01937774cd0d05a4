"""
Schema nodes describing how entities in a normalized store reference each other.

A schema is built from four shapes:

- ``EntitySchema``: an entity stored once under ``entities[key][id]``.
- ``CollectionSchema``: a list (``array_of``) or keyed mapping (``values_of``)
  whose items all follow one item schema.
- ``UnionSchema``: a reference that may point at one of several entity types,
  selected by a discriminator.
- Plain structures: any other mapping, read as attribute name -> nested schema.
  Nested objects with no identity of their own are described this way.

Example:
    user = EntitySchema("users")
    article = EntitySchema("articles")
    article.define(author=user, collections=array_of(EntitySchema("collections")))
    user.define(articles=array_of(article))
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Tuple, Union

from denormalizer.core.config import config
from denormalizer.core.containers import MISSING, get_in, is_mapping
from denormalizer.core.exceptions import SchemaDefinitionError
from denormalizer.core.types import SchemaShape

IdAttribute = Union[str, Callable[[Any], Any]]


class EntitySchema:
    """
    Schema for an entity type.

    Attributes:
        key: Name of the entity type in the store (``entities[key]``).
        schema: Attribute name -> nested schema node for this entity's own attributes.
    """

    def __init__(
        self,
        key: str,
        id_attribute: Optional[IdAttribute] = None,
        schema: Optional[Mapping] = None,
    ):
        if not isinstance(key, str) or not key:
            raise SchemaDefinitionError(
                f"Entity schema key must be a non-empty string, got {key!r}"
            )
        self.key = key
        self._id_attribute = id_attribute
        self.schema: Dict[str, Any] = {}
        if schema is not None:
            self.define(schema)

    @property
    def id_attribute(self) -> IdAttribute:
        if self._id_attribute is None:
            return config.default_id_attribute
        return self._id_attribute

    def define(self, mapping: Optional[Mapping] = None, **attributes: Any) -> "EntitySchema":
        """
        Add nested attribute schemas. Definitions are merged, so cyclic schemas
        can be wired after every entity schema has been created.
        """
        if mapping is not None and not isinstance(mapping, Mapping):
            raise SchemaDefinitionError(
                f"Schema definition for '{self.key}' must be a mapping, got {type(mapping).__name__}"
            )
        self.schema.update(mapping or {})
        self.schema.update(attributes)
        return self

    def get_id(self, entity: Any) -> Any:
        """Read the id of an embedded entity, or None if it has none."""
        id_attribute = self.id_attribute
        if callable(id_attribute):
            return id_attribute(entity)
        value = get_in(entity, [id_attribute])
        return None if value is MISSING else value

    def __repr__(self) -> str:
        return f"EntitySchema({self.key!r})"


class CollectionSchema:
    """
    Schema for a collection of references sharing one item schema.

    Whether the value is treated as ordered or keyed depends on the value itself;
    ``kind`` only records which builder created the node.
    """

    def __init__(self, item_schema: Any, kind: str = "array"):
        if item_schema is None:
            raise SchemaDefinitionError("Collection schema requires an item schema.")
        self.item_schema = item_schema
        self.kind = kind

    def __repr__(self) -> str:
        return f"CollectionSchema({self.item_schema!r}, kind={self.kind!r})"


class UnionSchema:
    """
    Schema for a polymorphic reference.

    Attributes:
        type_map: Member key -> member schema (usually an EntitySchema).
        schema_attribute: Attribute name, or callable, giving the member key of
            an embedded entity.
    """

    def __init__(self, type_map: Mapping, schema_attribute: IdAttribute):
        if not isinstance(type_map, Mapping) or not type_map:
            raise SchemaDefinitionError("Union schema requires a non-empty type map.")
        if schema_attribute is None:
            raise SchemaDefinitionError("Union schema requires a schema attribute.")
        self.type_map: Dict[Hashable, Any] = dict(type_map)
        self.schema_attribute = schema_attribute

    def is_reference(self, value: Any) -> bool:
        """True for normalized union stubs such as ``{"id": 1, "schema": "post"}``."""
        return is_mapping(value) and set(value.keys()) == {
            "id",
            config.union_reference_attribute,
        }

    def member_key(self, value: Any) -> Any:
        if self.is_reference(value):
            return value[config.union_reference_attribute]
        if callable(self.schema_attribute):
            return self.schema_attribute(value)
        key = get_in(value, [self.schema_attribute])
        return None if key is MISSING else key

    def member_schema(self, value: Any) -> Any:
        """The member schema selected by ``value``, or None if no member matches."""
        key = self.member_key(value)
        try:
            return self.type_map.get(key)
        except TypeError:
            # unhashable discriminator
            return None

    def __repr__(self) -> str:
        return f"UnionSchema({sorted(map(str, self.type_map))!r})"


def array_of(item_schema: Any) -> CollectionSchema:
    return CollectionSchema(item_schema, kind="array")


def values_of(item_schema: Any) -> CollectionSchema:
    return CollectionSchema(item_schema, kind="values")


def union_of(type_map: Mapping, schema_attribute: IdAttribute) -> UnionSchema:
    return UnionSchema(type_map, schema_attribute)


def classify(node: Any) -> SchemaShape:
    """
    Determine the shape of a schema node.

    Anything that is not one of the tagged schema classes is a plain structure;
    the walker decides what to do with plain structures that are not mappings.
    """
    if isinstance(node, EntitySchema):
        return SchemaShape.ENTITY
    if isinstance(node, CollectionSchema):
        return SchemaShape.COLLECTION
    if isinstance(node, UnionSchema):
        return SchemaShape.UNION
    return SchemaShape.PLAIN


def is_metadata(attribute: Any) -> bool:
    return isinstance(attribute, str) and attribute.startswith(config.metadata_prefix)


def iter_attributes(schema: Mapping) -> Iterator[Tuple[Hashable, Any]]:
    """Yield ``(attribute, node)`` pairs of a schema mapping, skipping metadata names."""
    for attribute, node in schema.items():
        if not is_metadata(attribute):
            yield attribute, node
