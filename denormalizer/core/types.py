from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Hashable, List, Mapping, Union

# Type definitions. Stores may be plain dicts or pyrsistent maps, so the
# aliases stay at the Mapping level.
EntityId = Union[str, int]
Store = Mapping[str, Mapping[Hashable, Any]]
Bag = Dict[str, Dict[str, Any]]
Path = List[Hashable]


class SchemaShape(Enum):
    ENTITY = "entity"
    COLLECTION = "collection"
    UNION = "union"
    # Anything that is not one of the tagged shapes above
    PLAIN = "plain"
