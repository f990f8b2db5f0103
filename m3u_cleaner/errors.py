class CleanerError(Exception):
    """Base class for errors that abort a whole run."""


class InputNotFound(CleanerError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"The file '{path}' was not found.")


class InputUnreadable(CleanerError):
    def __init__(self, path, reason=""):
        self.path = path
        msg = f"The file '{path}' could not be read"
        super().__init__(f"{msg}: {reason}" if reason else f"{msg}.")


class OutputWriteError(CleanerError):
    def __init__(self, path, reason=""):
        self.path = path
        msg = f"Could not write '{path}'"
        super().__init__(f"{msg}: {reason}" if reason else f"{msg}.")


class ConfigError(CleanerError, ValueError):
    pass

