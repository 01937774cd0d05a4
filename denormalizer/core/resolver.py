import logging
from typing import Any, Dict, Hashable, Optional, Tuple

from denormalizer.core.config import config
from denormalizer.core.containers import MISSING, get_in, is_mapping
from denormalizer.core.schema import EntitySchema
from denormalizer.core.types import EntityId, Store

logger = logging.getLogger(__name__)

# Returned in place of an entity when a reference cannot be resolved
UNRESOLVED = object()


class StoreIndex:
    """
    Read-only view of a normalized store that compares ids by their string form.

    Exact and stringified keys are tried first. When both miss, a table keyed
    by ``str(id)`` is built once for that entity type and reused for every
    later miss, so stores keyed by ints answer string ids (and the other way
    round) without rescanning the table.
    """

    def __init__(self, entities: Store):
        self.entities = entities
        self._by_string_id: Dict[str, Dict[str, Any]] = {}

    def lookup(self, key: str, entity_id: EntityId) -> Any:
        """Fetch ``entities[key][entity_id]``, or MISSING."""
        table = get_in(self.entities, [key])
        if table is MISSING or not is_mapping(table):
            return MISSING

        # Fast paths: exact key, then stringified key
        for candidate in (entity_id, str(entity_id)):
            record = get_in(table, [candidate])
            if record is not MISSING and record is not None:
                return record

        record = self._string_keyed(key, table).get(str(entity_id))
        return MISSING if record is None else record

    def _string_keyed(self, key: str, table: Any) -> Dict[str, Any]:
        index = self._by_string_id.get(key)
        if index is None:
            index = {}
            for stored_id, record in table.items():
                if record is not None:
                    index.setdefault(str(stored_id), record)
            self._by_string_id[key] = index
        return index


def lookup(entities: Store, key: str, entity_id: EntityId) -> Any:
    """
    Fetch ``entities[key][entity_id]``, comparing ids by their string form.

    A store keyed by ``"1"`` answers a lookup for ``1`` and the other way round.
    Returns MISSING when the entity type or the record is absent.
    """
    return StoreIndex(entities).lookup(key, entity_id)


def resolve(
    value_or_id: Any,
    entities: Store,
    schema: EntitySchema,
    index: Optional[StoreIndex] = None,
) -> Tuple[Any, Hashable]:
    """
    Locate the canonical value for an entity reference.

    Args:
        value_or_id: A bare id, or an already embedded entity mapping.
        entities: The normalized store.
        schema: The entity schema the reference points at.
        index: Index over ``entities`` shared by one denormalization call.
            A throwaway index is used when omitted.

    Returns:
        ``(entity, id)``. Embedded mappings are their own canonical value and
        their id is read through the schema's id attribute (None if absent).
        Bare ids are looked up in the store; ``(UNRESOLVED, id)`` is returned
        when the store has no record for them.
    """
    if is_mapping(value_or_id):
        return value_or_id, schema.get_id(value_or_id)

    if index is None:
        index = StoreIndex(entities)
    record = index.lookup(schema.key, value_or_id)
    if record is MISSING:
        if config.log_unresolved:
            logger.debug(
                f"No '{schema.key}' record for id {value_or_id!r}, leaving the reference unresolved"
            )
        return UNRESOLVED, value_or_id
    return record, value_or_id
