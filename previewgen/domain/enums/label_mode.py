from __future__ import annotations
from enum import StrEnum

class LabelMode(StrEnum):
    none = "none"
    absolute = "absolute"
    relative = "relative"
    filename = "filename"
