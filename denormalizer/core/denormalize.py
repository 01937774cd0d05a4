import logging
from typing import Any, Mapping, Optional

from denormalizer.core.bag import get_or_create
from denormalizer.core.containers import (
    MISSING,
    get_in,
    is_mapping,
    is_sequence,
    map_items,
    set_in,
    shallow_copy,
)
from denormalizer.core.resolver import UNRESOLVED, StoreIndex, resolve
from denormalizer.core.schema import (
    CollectionSchema,
    EntitySchema,
    UnionSchema,
    classify,
    iter_attributes,
)
from denormalizer.core.types import Bag, SchemaShape, Store

logger = logging.getLogger(__name__)


def denormalize(value: Any, entities: Store, schema: Any, bag: Optional[Bag] = None) -> Any:
    """
    Rebuild the nested form of ``value`` from a normalized entity store.

    Args:
        value: An entity id, an embedded entity, a list or keyed collection of
            either, or any other value (returned untouched).
        entities: The normalized store, entity key -> id -> record. Plain dicts
            and pyrsistent maps are both accepted; the store is never modified.
        schema: Schema node describing ``value``.
        bag: Memoization bag, entity key -> id -> denormalized entity. A fresh
            bag is created when omitted; pass one in to share already
            denormalized entities across several calls.

    Returns:
        The denormalized value, in the same container family as ``value``.
        References with no record in the store are left as the bare id.

    Example:
        >>> article = EntitySchema("articles")
        >>> article.define(author=EntitySchema("users"))
        >>> entities = {
        ...     "articles": {"1": {"id": 1, "author": 7}},
        ...     "users": {"7": {"id": 7, "name": "Dan"}},
        ... }
        >>> denormalize(1, entities, article)
        {'id': 1, 'author': {'id': 7, 'name': 'Dan'}}
    """
    if bag is None:
        bag = {}
    return _denormalize(value, StoreIndex(entities), schema, bag)


def denormalize_response(normalized: Any, schema: Any, bag: Optional[Bag] = None) -> Any:
    """
    Denormalize the ``{"result": ..., "entities": ...}`` output of a
    normalization step in one call.

    Input that does not have both keys is returned as is; it is assumed to be
    already denormalized.
    """
    if not is_mapping(normalized):
        return normalized
    if "result" not in normalized or "entities" not in normalized:
        return normalized
    return denormalize(normalized["result"], normalized["entities"], schema, bag)


def _denormalize(value: Any, store: StoreIndex, schema: Any, bag: Bag) -> Any:
    if value is None or value is MISSING:
        return value

    shape = classify(schema)
    if shape is SchemaShape.ENTITY:
        return _denormalize_entity(value, store, schema, bag)
    if shape is SchemaShape.COLLECTION:
        return _denormalize_collection(value, store, schema, bag)
    if shape is SchemaShape.UNION:
        return _denormalize_union(value, store, schema, bag)
    return _denormalize_plain(value, store, schema, bag)


def _fill_attributes(result: Any, source: Any, store: StoreIndex, schema: Mapping, bag: Bag) -> Any:
    """
    Denormalize every schema attribute present on ``source`` and write it into
    ``result``. Attributes absent from ``source`` stay absent; attributes the
    schema does not mention are left as they are.
    """
    for attribute, node in iter_attributes(schema):
        item = get_in(source, [attribute])
        if item is MISSING:
            continue
        result = set_in(result, [attribute], _denormalize(item, store, node, bag))
    return result


def _denormalize_entity(value: Any, store: StoreIndex, schema: EntitySchema, bag: Bag) -> Any:
    entity, entity_id = resolve(value, store.entities, schema, store)
    if entity is UNRESOLVED:
        return value

    def fill(reserved: Any) -> Any:
        return _fill_attributes(reserved, reserved, store, schema.schema, bag)

    if entity_id is None:
        logger.debug(f"Embedded '{schema.key}' entity has no id, denormalizing without memoization")
        return fill(shallow_copy(entity))

    return get_or_create(bag, schema.key, entity_id, entity, fill)


def _denormalize_collection(value: Any, store: StoreIndex, schema: CollectionSchema, bag: Bag) -> Any:
    if not (is_sequence(value) or is_mapping(value)):
        return value
    return map_items(
        value, lambda _key, item: _denormalize(item, store, schema.item_schema, bag)
    )


def _denormalize_union(value: Any, store: StoreIndex, schema: UnionSchema, bag: Bag) -> Any:
    member = schema.member_schema(value)
    if member is None:
        logger.debug(f"No union member matches {schema.member_key(value)!r}, returning value unchanged")
        return value

    # Normalized stubs resolve through the store, anything else is an embedded member
    reference = value["id"] if schema.is_reference(value) else value
    return _denormalize(reference, store, member, bag)


def _denormalize_plain(value: Any, store: StoreIndex, schema: Any, bag: Bag) -> Any:
    if not is_mapping(schema):
        return value

    if is_sequence(value):
        return map_items(
            value, lambda _key, item: _denormalize_plain(item, store, schema, bag)
        )

    if not is_mapping(value):
        return value

    return _fill_attributes(shallow_copy(value), value, store, schema, bag)
