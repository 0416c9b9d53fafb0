from rich.console import Console
from rich.text import Text

from zeroconfig.output.styles import Style


class Logger:
    """Report lines of a polling round, printed as one block on flush."""

    def __init__(self, console: Console, title: Text | None = None):
        self._console = console
        self._title = title
        self._lines: list[Text] = []

    def log(self, text: Text):
        self._lines.append(text)

    def flush(self):
        if not self._lines:
            return
        if self._title is not None:
            self._lines.insert(0, self._title)
            self._title = None
        self._console.print(Text('\n', style=Style.regular).join(self._lines))
        self._lines = []
