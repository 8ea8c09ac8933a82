from pymeerkat.lifecycle.hooks import (
    pre_save,
    post_save,
    pre_delete,
    post_delete,
    collect_hooks,
    run_hooks,
)
from pymeerkat.lifecycle.observability import (
    get_slow_query_threshold,
    set_slow_query_threshold,
    track_query,
)

__all__ = [
    "pre_save",
    "post_save",
    "pre_delete",
    "post_delete",
    "collect_hooks",
    "run_hooks",
    "get_slow_query_threshold",
    "set_slow_query_threshold",
    "track_query",
]
