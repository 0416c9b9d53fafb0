from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style

__all__ = ('CONSOLE', 'Style')
