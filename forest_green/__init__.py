"""
Forest-green: mean-colour frame synthesis for timestamped forest camera
photographs.
"""

from .composer import FrameComposer
from .config import Config, DayNightWindow, FontSettings, load_config
from .errors import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    FontError,
    ForestGreenError,
    MalformedName,
)
from .rendering import RenderDriver
from .timeline import CursorState, TimelineCursor

__all__ = [
    "Config",
    "ConfigurationError",
    "CursorState",
    "DayNightWindow",
    "DecodeError",
    "EncodeError",
    "FontError",
    "FontSettings",
    "ForestGreenError",
    "FrameComposer",
    "MalformedName",
    "RenderDriver",
    "TimelineCursor",
    "load_config",
]
