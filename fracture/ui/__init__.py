"""Terminal UI pieces for fracture: status spinner and searchable picker."""

from .status import NullStatus, RichStatus, StatusSink
from .picker import Choice, Selection, filter_choices, pick

__all__ = [
    "StatusSink",
    "RichStatus",
    "NullStatus",
    "Choice",
    "Selection",
    "filter_choices",
    "pick",
]
