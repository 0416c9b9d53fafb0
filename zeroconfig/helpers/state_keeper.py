from copy import deepcopy
from typing import Generic
from typing import TypeVar

T = TypeVar('T')

_NOT_REPORTED = object()


class StateKeeper(Generic[T]):
    """Last reported state of a polled subject, a poll loop prints transitions only."""

    def __init__(self):
        self._state = _NOT_REPORTED

    @property
    def state(self) -> T | None:
        return None if self._state is _NOT_REPORTED else self._state

    def changed(self, new_state: T) -> bool:
        if self._state is not _NOT_REPORTED and self._state == new_state:
            return False
        self._state = deepcopy(new_state)
        return True
