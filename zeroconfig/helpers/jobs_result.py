from enum import Enum
from enum import auto

from zeroconfig.runtime.process_output import ProcessOutput


class JobResult(Enum):
    GOOD = auto()
    BAD = auto()


class OperationError:
    """Failed engine command, compares equal to JobResult.BAD."""

    def __init__(self, output: ProcessOutput):
        self.output = output

    @property
    def details(self) -> str:
        return self.output.error_text()

    def __eq__(self, other):
        return other == JobResult.BAD

    def __repr__(self):
        return f'Engine command exited with code {self.output.returncode}:\n{self.details}'


def result_of(output: ProcessOutput) -> JobResult | OperationError:
    if output.returncode != 0:
        return OperationError(output)
    return JobResult.GOOD
