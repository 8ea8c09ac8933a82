from __future__ import annotations

import inspect
from typing import Any, Callable

# Hook type constants
PRE_SAVE = "pre_save"
POST_SAVE = "post_save"
PRE_DELETE = "pre_delete"
POST_DELETE = "post_delete"

_ALL_HOOKS = (PRE_SAVE, POST_SAVE, PRE_DELETE, POST_DELETE)

HOOK_ATTRIBUTE = "_meerkat_hooks"


def _make_hook_decorator(hook_type: str) -> Callable:
    """Create a decorator that tags a document method as a hook."""

    def decorator(fn: Callable) -> Callable:
        tags = getattr(fn, HOOK_ATTRIBUTE, None)
        if tags is None:
            tags = []
            setattr(fn, HOOK_ATTRIBUTE, tags)
        tags.append(hook_type)
        return fn

    return decorator


pre_save = _make_hook_decorator(PRE_SAVE)
post_save = _make_hook_decorator(POST_SAVE)
pre_delete = _make_hook_decorator(PRE_DELETE)
post_delete = _make_hook_decorator(POST_DELETE)


def collect_hooks(cls: type) -> dict[str, list[str]]:
    """Walk MRO in reverse and collect methods decorated with hook decorators.

    Returns a dict mapping hook_type -> list of method names, parent hooks
    first. An override keeps its parent's position.
    """
    hooks: dict[str, list[str]] = {h: [] for h in _ALL_HOOKS}

    for klass in reversed(cls.__mro__):
        for name, method in vars(klass).items():
            for hook_type in getattr(method, HOOK_ATTRIBUTE, None) or ():
                if name not in hooks[hook_type]:
                    hooks[hook_type].append(name)

    return hooks


async def run_hooks(instance: Any, hook_type: str) -> None:
    """Run all hooks of the given type on a document instance."""
    for method_name in instance.__class__._hooks.get(hook_type, []):
        result = getattr(instance, method_name)()
        if inspect.isawaitable(result):
            await result
