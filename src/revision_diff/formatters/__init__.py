"""Field formatters: generic value formatters and set-valued field formatters."""

from .base import (
    UNKNOWN,
    format_area_change,
    format_ended_change,
    format_gender_change,
    format_scalar_change,
    format_type_change,
    humanize,
)
from .sets import (
    SetFormatter,
    alias_set,
    identifier_set,
    language_set,
    publisher_set,
    release_event_set,
)

__all__ = [
    "UNKNOWN",
    "format_area_change",
    "format_ended_change",
    "format_gender_change",
    "format_scalar_change",
    "format_type_change",
    "humanize",
    "SetFormatter",
    "alias_set",
    "identifier_set",
    "language_set",
    "publisher_set",
    "release_event_set",
]
