"""Request-scoped values: the caller's identity, role and dummy flag."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any
from uuid import UUID

from pvzservice.model import Role

USER_ID_KEY = "user_id"
IS_DUMMY_KEY = "is_dummy"
ROLE_KEY = "role"


class Context:
    """An immutable chain of key/value pairs; children shadow parents."""

    __slots__ = ("_parent", "_key", "_value", "_has_value")

    def __init__(self) -> None:
        self._parent: Context | None = None
        self._key: Any = None
        self._value: Any = None
        self._has_value = False

    def with_value(self, key: Any, value: Any) -> Context:
        child = Context()
        child._parent = self
        child._key = key
        child._value = value
        child._has_value = True
        return child

    def value(self, key: Any) -> Any:
        node: Context | None = self
        while node is not None:
            if node._has_value and node._key == key:
                return node._value
            node = node._parent
        return None


def _typed(value: Any, kind: type) -> Any:
    return value if isinstance(value, kind) else None


def set_user_id(ctx: Context, user_id: UUID) -> Context:
    return ctx.with_value(USER_ID_KEY, user_id)


def set_is_dummy(ctx: Context, is_dummy: bool) -> Context:
    return ctx.with_value(IS_DUMMY_KEY, is_dummy)


def set_role(ctx: Context, role: Role) -> Context:
    return ctx.with_value(ROLE_KEY, role)


def get_is_dummy(ctx: Context) -> bool | None:
    """Return the dummy flag, or None when it is not set."""
    return _typed(ctx.value(IS_DUMMY_KEY), bool)


def get_user_id(ctx: Context) -> UUID | None:
    return _typed(ctx.value(USER_ID_KEY), UUID)


def get_role(ctx: Context) -> Role | None:
    return _typed(ctx.value(ROLE_KEY), Role)


def echo_get_role(store: Mapping[str, Any]) -> Role | None:
    """Read the role from a per-request handler store."""
    return _typed(store.get(ROLE_KEY), Role)


def echo_set_role(store: MutableMapping[str, Any], role: Role) -> None:
    store[ROLE_KEY] = role


def set_echo(ctx: Context, store: MutableMapping[str, Any]) -> None:
    """Copy whichever identity values the context holds into the store."""
    role = get_role(ctx)
    if role is not None:
        store[ROLE_KEY] = role
    user_id = get_user_id(ctx)
    if user_id is not None:
        store[USER_ID_KEY] = user_id
    is_dummy = get_is_dummy(ctx)
    if is_dummy is not None:
        store[IS_DUMMY_KEY] = is_dummy