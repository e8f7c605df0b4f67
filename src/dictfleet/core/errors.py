"""
Startup errors.

Every failure before the listeners accept traffic is fatal. Each error
carries a kind tag and the exit code the CLI terminates with.
"""


class StartupError(Exception):
    kind = "startup"
    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(StartupError):
    """Invalid --port / --dir and friends."""
    kind = "config"
    exit_code = 2


class DiscoveryError(StartupError):
    """Bundle discovery failed or found nothing."""
    kind = "discovery"
    exit_code = 3


class DirectoryNotFound(DiscoveryError):
    pass


class NotADirectory(DiscoveryError):
    pass


class AmbiguousBundle(DiscoveryError):
    pass


class BindError(StartupError):
    """A listener port could not be bound."""
    kind = "bind"
    exit_code = 4
