"""Storage of the canvas text and caret between sessions.

By default both live in the user's data directory (``platformdirs``), or in
``$BLANKCANVAS_DATA_DIR`` when set. When the editor is started on a file,
the text goes to that file and the caret to ``.FILE.cursor`` beside it.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import platformdirs

from .constants import EditorConstants
from .geometry import Position
from .grid import trim_text

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def get_data_dir() -> Path:
    """Directory holding the default text and caret files."""
    override = os.environ.get(EditorConstants.ENV_DATA_DIR)
    if override:
        return Path(override)
    return Path(platformdirs.user_data_dir(EditorConstants.APP_NAME))


def get_cursor_path(filename: PathLike) -> Path:
    """Caret sidecar for a document.

    For /path/to/notes.txt returns /path/to/.notes.txt.cursor
    """
    path = Path(filename)
    name = (
        EditorConstants.CURSOR_SIDECAR_PREFIX
        + path.name
        + EditorConstants.CURSOR_SIDECAR_SUFFIX
    )
    return path.with_name(name)


def default_cursor() -> Position:
    return Position(*EditorConstants.DEFAULT_CURSOR)


def write_atomic(path: Path, content: str) -> None:
    """Write content to path via a temp file and rename.

    Raises:
        OSError: the write failed; the temp file has been removed
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=path.parent,
            prefix=path.name,
            suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
            delete=False,
        ) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename is not None and os.path.exists(temp_filename):
            os.remove(temp_filename)
        raise


class DocumentStore:
    """Loads and saves the canvas text and caret position."""

    def __init__(self, text_path: Optional[PathLike] = None,
                 cursor_path: Optional[PathLike] = None):
        if text_path is None:
            data_dir = get_data_dir()
            self.text_path = data_dir / EditorConstants.STORE_TEXT
            default_cursor_path = data_dir / EditorConstants.STORE_CURSOR
        else:
            self.text_path = Path(text_path)
            default_cursor_path = get_cursor_path(self.text_path)
        self.cursor_path = Path(cursor_path) if cursor_path is not None else default_cursor_path

    def load(self) -> str:
        """Stored text, or the welcome text when there is none.

        An empty file counts as no text.
        """
        try:
            text = self.text_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.debug("No stored text at %s", self.text_path)
            return EditorConstants.DEFAULT_VALUE
        return text or EditorConstants.DEFAULT_VALUE

    def save(self, text: str) -> None:
        """Store text without its padding.

        Raises:
            OSError: the file could not be written
        """
        write_atomic(self.text_path, trim_text(text))

    def load_cursor(self) -> Position:
        """Stored caret, or the default caret when absent or unreadable."""
        try:
            with open(self.cursor_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return default_cursor()
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Could not load cursor from {self.cursor_path}: {e}")
            return default_cursor()

        if not isinstance(data, dict):
            logger.warning("Cursor file has invalid format (not a dict), ignoring")
            return default_cursor()
        line, ch = data.get("line"), data.get("ch")
        if not _is_index(line) or not _is_index(ch):
            logger.warning(f"Cursor file holds invalid position {data!r}, ignoring")
            return default_cursor()
        return Position(line, ch)

    def save_cursor(self, pos: Position) -> None:
        """Store the caret as ``{"line": n, "ch": n}``.

        Raises:
            OSError: the file could not be written
        """
        write_atomic(self.cursor_path, json.dumps(pos.to_dict()))


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
