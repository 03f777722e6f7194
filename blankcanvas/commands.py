"""Key bindings: one command object per canvas action."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType, SHIFT_SPACE

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """An action bound to a key."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command changed the canvas
        """


class MoveCommand(EditorCommand):
    """Move the caret by a fixed offset, dropping any block."""

    def __init__(self, lines: int = 0, chars: int = 0):
        self.lines = lines
        self.chars = chars

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.session.move_cursor(self.lines, self.chars)
        return False


class ExtendBlockCommand(EditorCommand):
    """Grow the block from the drag anchor (shift+arrow)."""

    def __init__(self, lines: int = 0, chars: int = 0):
        self.lines = lines
        self.chars = chars

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.session.extend_block(self.lines, self.chars)
        return False


class HomeCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.move_home()
        return False


class EndCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.move_end()
        return False


class CollapseSelectionCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.collapse_selection()
        return False


class EditCommand(EditorCommand):
    """Base class for commands that change the canvas."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.backspace()


class DeleteCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.delete()


class EnterCommand(EditorCommand):
    """Enter only moves the caret; it never splits a line."""

    def execute(self, editor, key_event):
        editor.session.enter()
        return False


class ShiftSpaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.shift_space()


class CutCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.cut()
        editor.status_message = "Block cut"


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.paste()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Stray control bytes are not typed onto the canvas
        if char and ord(char[0]) >= 32:
            editor.session.type_text(char)


class SystemCommand(EditorCommand):
    """Base class for commands that leave the canvas alone."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Do the action."""


class CopyCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.session.copy():
            editor.status_message = "Block copied"
        else:
            editor.status_message = "Clipboard unavailable"


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        # Everything is saved as it is typed; flush the pending reflow
        editor.session.reflow.flush()
        editor.running = False


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class CommandRegistry:
    """Maps (KeyType, value) pairs to commands; typing is the fallback."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Bind the canvas keys."""
        # Caret movement
        self.register((KeyType.SPECIAL, 'left'), MoveCommand(chars=-1))
        self.register((KeyType.SPECIAL, 'right'), MoveCommand(chars=1))
        self.register((KeyType.SPECIAL, 'up'), MoveCommand(lines=-1))
        self.register((KeyType.SPECIAL, 'down'), MoveCommand(lines=1))
        self.register((KeyType.SPECIAL, 'home'), HomeCommand())
        self.register((KeyType.SPECIAL, 'end'), EndCommand())

        # Block selection (Shift+arrow)
        self.register((KeyType.SHIFT_SPECIAL, 'left'), ExtendBlockCommand(chars=-1))
        self.register((KeyType.SHIFT_SPECIAL, 'right'), ExtendBlockCommand(chars=1))
        self.register((KeyType.SHIFT_SPECIAL, 'up'), ExtendBlockCommand(lines=-1))
        self.register((KeyType.SHIFT_SPECIAL, 'down'), ExtendBlockCommand(lines=1))
        self.register((KeyType.SPECIAL, 'escape'), CollapseSelectionCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCommand())
        self.register((KeyType.CTRL, 'd'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), EnterCommand())
        self.register((KeyType.SPECIAL, SHIFT_SPACE), ShiftSpaceCommand())
        self.register((KeyType.CTRL, 'x'), CutCommand())
        self.register((KeyType.CTRL, 'c'), CopyCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Bind key to command, replacing any earlier binding."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Command bound to a key, or None."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the canvas was changed
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
