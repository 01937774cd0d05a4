"""
Per-call memoization of denormalized entities.

The bag maps entity key -> stringified id -> denormalized entity. A slot is
reserved before the entity's attributes are resolved, so a reference cycle
that leads back to an entity under construction receives the reserved object
instead of recursing forever.
"""
import logging
from typing import Any, Callable

from denormalizer.core.containers import shallow_copy
from denormalizer.core.types import Bag

logger = logging.getLogger(__name__)


def bag_id(entity_id: Any) -> str:
    """Slot key for an id. ``1`` and ``"1"`` share a slot."""
    return str(entity_id)


def get_or_create(
    bag: Bag,
    key: str,
    entity_id: Any,
    canonical: Any,
    fill: Callable[[Any], Any],
) -> Any:
    """
    Return the denormalized entity for ``(key, entity_id)``, building it once.

    Args:
        bag: The memoization bag for the current call.
        key: Entity type name.
        entity_id: Entity id (compared by string form).
        canonical: The entity as found in the store or embedded in the input.
        fill: Resolves the attributes of the reserved copy and returns it.

    Returns:
        The object stored in the bag. For plain containers every caller gets the
        same object, including callers that arrive while it is still being
        filled. Persistent containers cannot be filled in place, so a caller
        arriving mid-construction gets the value reserved at that point.
    """
    slots = bag.setdefault(key, {})
    slot_id = bag_id(entity_id)
    if slot_id in slots:
        logger.debug(f"Reusing '{key}' entity {slot_id!r} from the bag")
        return slots[slot_id]

    # Reserve before filling; the store's record must never be written to.
    slots[slot_id] = shallow_copy(canonical)
    slots[slot_id] = fill(slots[slot_id])
    return slots[slot_id]
