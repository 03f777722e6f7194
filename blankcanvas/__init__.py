"""blankcanvas - an overwrite-only text canvas with block selection."""

from .config_scanner import Config, scan_config
from .display import Display
from .document import GridDocument
from .geometry import Position, Range
from .grid import fill
from .host import TextHost
from .persistence import DocumentStore
from .selection import normalize_selection, sorted_selection, square_ranges
from .session import EditingSession

__all__ = [
    'Config',
    'Display',
    'DocumentStore',
    'EditingSession',
    'GridDocument',
    'Position',
    'Range',
    'TextHost',
    'fill',
    'normalize_selection',
    'scan_config',
    'sorted_selection',
    'square_ranges',
]
