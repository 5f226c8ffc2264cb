"""Scripta: a screenplay editor core.

Scripta keeps a screenplay as a flat, ordered sequence of typed elements and
derives scenes, characters and analytics from it. Scripts can be saved to a
key-value store and exported as Fountain or print-ready HTML.
"""

from .analytics import ScriptAnalytics, compute_analytics
from .config import ScriptaSettings, get_logger, get_settings
from .document import AutosaveScheduler, DocumentStore, ScriptState
from .exceptions import ScriptaError
from .models import Character, ElementType, Scene, ScreenplayElement

__version__ = "0.1.0"

__all__ = [
    "AutosaveScheduler",
    "Character",
    "DocumentStore",
    "ElementType",
    "Scene",
    "ScreenplayElement",
    "ScriptAnalytics",
    "ScriptState",
    "ScriptaError",
    "ScriptaSettings",
    "__version__",
    "compute_analytics",
    "get_logger",
    "get_settings",
]
