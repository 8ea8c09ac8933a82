from __future__ import annotations

import types
from typing import Annotated, Any, Callable, Union, get_args, get_origin

from pymeerkat.fields.markers import Lowercase, MemberDescriptor, Uppercase, members_with
from pymeerkat.utils.exceptions import ConfigurationError


def _is_string_type(annotation: Any) -> bool:
    """True for ``str`` and optional ``str``."""
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        args = {
            get_args(arg)[0] if get_origin(arg) is Annotated else arg
            for arg in get_args(annotation)
        }
        return str in args and args <= {str, type(None)}
    return False


def _string_members(cls: type, marker_type: type) -> list[MemberDescriptor]:
    members = [member for _, member in members_with(cls, marker_type)]
    for member in members:
        if not _is_string_type(member.declared_type):
            raise ConfigurationError(
                f"{marker_type.__name__} can only be applied to str fields; "
                f"{cls.__name__}.{member.attribute} is {member.declared_type!r}"
            )
    return members


def _transform(doc: Any, marker_type: type, convert: Callable[[str], str]) -> None:
    for member in _string_members(type(doc), marker_type):
        value = getattr(doc, member.attribute)
        if value is not None:
            object.__setattr__(doc, member.attribute, convert(value))


def apply_case_transforms(doc: Any) -> None:
    """Lowercase/uppercase marked string fields in place.

    Raises:
        ConfigurationError: If a case marker sits on a non-string field
    """
    _transform(doc, Lowercase, str.lower)
    _transform(doc, Uppercase, str.upper)
