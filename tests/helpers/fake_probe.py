from zeroconfig.runtime.descriptors import RUNTIMES
from zeroconfig.runtime.discovery import ProbeResult

VERSION_COMMANDS = {tuple(runtime.version()) for runtime in RUNTIMES}


class FakeProbe:
    """Answers runtime probes from declared command -> version and running command sets."""

    def __init__(self, installed: dict[str, str] | None = None, running: set[str] | None = None):
        self.installed = installed or {}
        self.running = running or set()
        self.calls: list[list[str]] = []

    async def __call__(self, argv: list[str]) -> ProbeResult:
        self.calls.append(argv)
        command = argv[0]
        if command not in self.installed:
            return ProbeResult(False, f'{command}: command not found')
        if tuple(argv) in VERSION_COMMANDS:
            return ProbeResult(True, self.installed[command])
        if command in self.running:
            return ProbeResult(True, 'ok')
        return ProbeResult(False, 'Cannot connect to the daemon')
