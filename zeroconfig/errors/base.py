class ZeroConfigError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EngineCallError(ZeroConfigError):
    """Raw failure of one call across the container engine boundary."""

    def __init__(self, operation: str, target: str, details: str):
        super().__init__(f"Engine call '{operation}' failed for {target}: {details}")
        self.operation = operation
        self.target = target
        self.details = details
