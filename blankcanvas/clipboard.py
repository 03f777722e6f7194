"""System clipboard integration."""

import logging
import sys

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Plain-text access to the system clipboard.

    On macOS the native pasteboard is used via PyObjC when it is installed;
    everywhere else (and as the macOS fallback) pyperclip.
    """

    @staticmethod
    def copy_text(text: str) -> bool:
        """Copy text to the system clipboard.

        Returns:
            True if the clipboard accepted the text
        """
        if sys.platform == 'darwin':
            try:
                from AppKit import NSPasteboard, NSPasteboardTypeString
            except ImportError:
                pass
            else:
                pb = NSPasteboard.generalPasteboard()
                pb.clearContents()
                return bool(pb.setString_forType_(text, NSPasteboardTypeString))
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard unavailable, copy failed: {e}")
            return False
        return True

    @staticmethod
    def paste_text() -> str:
        """Text currently on the system clipboard ("" when unavailable)."""
        if sys.platform == 'darwin':
            try:
                from AppKit import NSPasteboard, NSPasteboardTypeString
            except ImportError:
                pass
            else:
                pb = NSPasteboard.generalPasteboard()
                plain_text = pb.stringForType_(NSPasteboardTypeString)
                return str(plain_text) if plain_text else ""
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard unavailable, paste failed: {e}")
            return ""
