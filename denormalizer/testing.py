import logging
from typing import Any, Optional, Set, Tuple

from denormalizer.core.containers import is_mapping, is_sequence

logger = logging.getLogger(__name__)


def verify_identical(original: Any, denormalized: Any, _seen: Optional[Set[Tuple[int, int]]] = None) -> bool:
    """
    Recursively verifies that a denormalized object is identical in structure
    and values to the original nested object.

    Cyclic graphs are supported: a pair of containers that is already being
    compared higher up the recursion is treated as matching.

    Args:
        original: The original nested object (list, tuple, dict, PVector, PMap or primitive).
        denormalized: The denormalized object.

    Returns:
        bool: True if the objects are identical, False otherwise. The first
        mismatch found is logged at WARNING level.
    """
    # Check type mismatch
    if type(original) is not type(denormalized):
        logger.warning(f"Type mismatch: {type(original)} vs {type(denormalized)}")
        return False

    if not (is_sequence(original) or is_mapping(original)):
        # Compare primitive values
        if original != denormalized:
            logger.warning(f"Value mismatch: {original!r} vs {denormalized!r}")
            return False
        return True

    seen = _seen if _seen is not None else set()
    pair = (id(original), id(denormalized))
    if pair in seen:
        return True
    seen.add(pair)

    # Compare sequences
    if is_sequence(original):
        if len(original) != len(denormalized):
            logger.warning(f"Sequence length mismatch: {len(original)} vs {len(denormalized)}")
            return False
        # Recursively compare each item in the sequence
        return all(verify_identical(o, d, seen) for o, d in zip(original, denormalized))

    # Compare mappings
    if set(original.keys()) != set(denormalized.keys()):
        logger.warning(f"Key mismatch: {sorted(map(str, original.keys()))} vs {sorted(map(str, denormalized.keys()))}")
        return False
    # Recursively compare each value in the mapping
    return all(verify_identical(original[k], denormalized[k], seen) for k in original.keys())
