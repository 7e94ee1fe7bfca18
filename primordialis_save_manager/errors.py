class SaveManagerError(Exception):
    """Base class for failures that end the launcher with a nonzero exit."""


class InvalidExecutableError(SaveManagerError):
    pass


class SaveSwapError(SaveManagerError):
    """Swap-in or manual save could not be completed; wraps the OSError."""

    def __init__(self, message: str, cause: OSError):
        super().__init__(f"{message}: {cause}")
        self.cause = cause
