"""Exceptions raised by the testing driver.

Expected absence of an element is never an exception inside the resolver;
these types cover the cases that must reach the caller.
"""


class TestingDriverError(Exception):
    """Base class for all testing driver failures."""

    __test__ = False  # keep pytest from collecting this class


class UnsupportedBrowserError(TestingDriverError, ValueError):
    """The requested browser kind cannot be launched."""


class DriverInstantiationError(TestingDriverError):
    """Creating the remote browser session failed."""


class SessionNotStartedError(TestingDriverError):
    """An action needs a browser session but none was instantiated."""


class SessionTerminatedError(TestingDriverError):
    """The session was quit and cannot be used anymore."""


class ElementNotFoundError(TestingDriverError):
    """No element matched the locator within the resolution budget."""

    def __init__(self, locator: str, message: str = ""):
        self.locator = locator
        super().__init__(message or f"No element found for locator: {locator}")


__all__ = [
    "TestingDriverError",
    "UnsupportedBrowserError",
    "DriverInstantiationError",
    "SessionNotStartedError",
    "SessionTerminatedError",
    "ElementNotFoundError",
]
