class DecodeError(Exception):
    """Raised when a stored record or an external response cannot be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not decode {source}: {reason}")
