"""Constants and configuration for the blankcanvas editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Grid layout
    EOL = "\n"
    SPACE = " "
    BASELINE_LINES = 90  # Canvas never has fewer rows than this
    BASELINE_COLUMNS = 300  # Canvas never has fewer columns than this

    # Fresh session
    DEFAULT_VALUE = "\n   blank.\n"
    DEFAULT_CURSOR = (3, 8)  # (line, ch)

    # Display configuration defaults
    DEFAULT_SCHEMA = "auto"
    DEFAULT_FONT = "Geist Mono"
    DEFAULT_SIZE = 14
    MIN_SIZE = 12  # Smaller r.size values are clamped up to this
    SCHEMAS = ("dark", "light", "auto")

    # Reflow
    REFLOW_DELAY = 1.0  # Seconds of quiet before fill + rescan (trailing edge)

    # Storage
    APP_NAME = "blankcanvas"
    STORE_TEXT = "blank-editor.txt"
    STORE_CURSOR = "blank-editor-cursor.json"
    CURSOR_SIDECAR_PREFIX = "."  # FILE -> .FILE.cursor
    CURSOR_SIDECAR_SUFFIX = ".cursor"
    ATOMIC_SAVE_SUFFIX = ".tmp"

    # Environment overrides
    ENV_DATA_DIR = "BLANKCANVAS_DATA_DIR"
    ENV_LOG_FILE = "BLANKCANVAS_LOG_FILE"
    ENV_LOG_LEVEL = "BLANKCANVAS_LOG_LEVEL"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    HELP_HINT = "F1 for help"
