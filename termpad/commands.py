"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Commands other than quit reset a pending quit confirmation
    confirms_quit = False

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Movement never changes the buffer or the selection."""
        self._move(editor, key_event)

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.session.move_end()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit through the session."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.delete()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.insert_newline()


class InsertTabCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.insert_tab()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters and unparsed sequences
        if len(char) != 1 or ord(char) < 32 or ord(char) == 127:
            return
        editor.session.insert_char(char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """System commands don't modify buffer content."""
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    confirms_quit = True

    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_help()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'tab'), InsertTabCommand())

        # System commands, Midnight Commander function keys plus Ctrl aliases
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())
        self.register((KeyType.SPECIAL, 'f2'), SaveCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.SPECIAL, 'f10'), QuitCommand())
        self.register((KeyType.SPECIAL, 'escape'), QuitCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if a command was bound to the key
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.key_type == KeyType.REGULAR:
            command = InsertTextCommand()
        if command is None:
            return False
        if not command.confirms_quit:
            editor.quit_pending = False
        command.execute(editor, key_event)
        return True
