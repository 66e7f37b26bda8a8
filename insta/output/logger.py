from enum import Enum
from enum import auto

from rich.console import Console
from rich.text import Text

from insta.output.console import CONSOLE


class WaitVerbosity(Enum):
    QUIET = auto()
    COMPACT = auto()
    FULL = auto()


class Report:
    """
    Lines of one progress step, printed as a single block.
    """

    def __init__(self, console: Console = CONSOLE):
        self._console = console
        self._lines: list[Text] = []

    def line(self, text: Text) -> 'Report':
        self._lines.append(text)
        return self

    def print(self) -> None:
        if self._lines:
            self._console.print(Text('\n').join(self._lines))
        self._lines = []
