class NewGameError(Exception):
    """Base class for failures raised while choosing a new character."""


class ConfigurationError(NewGameError):
    """Startup options admit no legal character; never relaxed silently."""


class InvariantViolation(NewGameError):
    """A collaborator broke its contract (e.g. a prompt offered a banned option)."""


class NewGameAborted(NewGameError):
    def __init__(self, reason: str = "cancel") -> None:
        super().__init__(f"New game aborted ({reason}).")
        self.reason = reason
