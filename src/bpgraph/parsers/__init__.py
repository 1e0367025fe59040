# -*- coding: utf-8 -*-
"""
bpgraph Parsers - Text notations in, Graph out (and back).
"""

from .base import BaseGraphParser, ParseDiagnostic, ParseReport, StrictParseError
from .arrow import ArrowParser
from .ascii_tree import AsciiTreeParser
from .legacy_arrow import LegacyArrowParser
from .unreal_clipboard import UnrealClipboardParser
from .colors import color_to_type
from .identity import (
    NodeIdentityPolicy,
    LiteralNameIdentity,
    WindowedNameIdentity,
    TypeBucketedPins,
)

__all__ = [
    "BaseGraphParser",
    "ParseDiagnostic",
    "ParseReport",
    "StrictParseError",
    "ArrowParser",
    "AsciiTreeParser",
    "LegacyArrowParser",
    "UnrealClipboardParser",
    "color_to_type",
    "NodeIdentityPolicy",
    "LiteralNameIdentity",
    "WindowedNameIdentity",
    "TypeBucketedPins",
]
