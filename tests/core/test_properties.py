"""
Property tests over generated stores with arbitrary reference cycles.
"""
import copy
from unittest import TestCase

from hypothesis import HealthCheck, given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from denormalizer import EntitySchema, array_of, denormalize
from denormalizer.testing import verify_identical


def friend_schema():
    user = EntitySchema("users")
    user.define(friends=array_of(user), best_friend=user)
    return user


@st.composite
def friendship_stores(draw):
    """
    Users referencing each other through ``friends`` and ``best_friend``.
    Ids at or above ``size`` have no record, so some references dangle.
    """
    size = draw(st.integers(min_value=1, max_value=6))
    reference = st.integers(min_value=0, max_value=size + 1)
    users = {}
    for user_id in range(size):
        record = {"id": user_id, "name": f"user-{user_id}"}
        if draw(st.booleans()):
            record["friends"] = draw(st.lists(reference, max_size=4))
        if draw(st.booleans()):
            record["best_friend"] = draw(st.one_of(st.none(), reference))
        users[str(user_id)] = record
    root = draw(st.integers(min_value=0, max_value=size - 1))
    return {"users": users}, root


def _references(user):
    refs = list(user.get("friends", []))
    if "best_friend" in user:
        refs.append(user["best_friend"])
    return refs


def _users_by_id(root):
    """Walk a denormalized graph and group the user objects found by id."""
    found = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue
        found.setdefault(node["id"], [])
        if any(existing is node for existing in found[node["id"]]):
            continue
        found[node["id"]].append(node)
        stack.extend(_references(node))
    return found


class FriendshipGraphPropertyTests(TestCase):
    @hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(friendship_stores())
    def test_does_not_mutate_the_store(self, generated):
        entities, root = generated
        snapshot = copy.deepcopy(entities)
        denormalize(root, entities, friend_schema())
        self.assertEqual(entities, snapshot)

    @hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(friendship_stores())
    def test_id_and_record_forms_match(self, generated):
        entities, root = generated
        user = friend_schema()
        by_id = denormalize(root, entities, user)
        by_record = denormalize(entities["users"][str(root)], entities, user)
        self.assertTrue(verify_identical(by_id, by_record))

    @hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(friendship_stores())
    def test_each_entity_is_built_once(self, generated):
        entities, root = generated
        result = denormalize(root, entities, friend_schema())
        for user_id, objects in _users_by_id(result).items():
            self.assertEqual(len(objects), 1, f"user {user_id} was built more than once")

    @hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(friendship_stores())
    def test_references_resolve_or_stay_bare(self, generated):
        entities, root = generated
        result = denormalize(root, entities, friend_schema())
        for objects in _users_by_id(result).values():
            for ref in _references(objects[0]):
                if ref is None:
                    continue
                if isinstance(ref, dict):
                    self.assertIn(str(ref["id"]), entities["users"])
                else:
                    self.assertNotIn(str(ref), entities["users"])
