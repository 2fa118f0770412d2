"""Exception types raised by the LinkVet pipeline."""


class LinkVetError(Exception):
    """Base exception for pipeline errors."""

    pass


class InputError(LinkVetError):
    """Request rejected before entering the pipeline (missing or malformed input)."""

    def __init__(self, message: str, field: str = "url"):
        self.message = message
        self.field = field
        super().__init__(message)


class ResolutionError(LinkVetError):
    """A gateway-decoded target could not be resolved to a valid URL."""

    def __init__(self, target: str, gateway: str | None = None, message: str = "Invalid unwrapped URL"):
        self.target = target
        self.gateway = gateway
        self.message = message
        if gateway:
            super().__init__(f"{message} from {gateway}: {target}")
        else:
            super().__init__(f"{message}: {target}")
