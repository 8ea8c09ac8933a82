from pymeerkat.utils.exceptions import (
    MeerkatError,
    ConfigurationError,
    DocumentNotFound,
    NotConnected,
)
from pymeerkat.utils.inflection import pluralize, replace_last_occurrence
from pymeerkat.utils.settings import SettingsResolver, normalize_collection_name
from pymeerkat.utils.types import (
    DocumentData,
    FilterSpec,
    SortSpec,
    IndexKeys,
    merge_filters,
)

__all__ = [
    "MeerkatError",
    "ConfigurationError",
    "DocumentNotFound",
    "NotConnected",
    "pluralize",
    "replace_last_occurrence",
    "SettingsResolver",
    "normalize_collection_name",
    "DocumentData",
    "FilterSpec",
    "SortSpec",
    "IndexKeys",
    "merge_filters",
]
