"""Errors raised while laying out a circuit."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class of every error raised by the layout engine.

    All conversion errors abort the whole conversion, no partial layout is returned.
    """


class OperationNotSupportedError(LayoutError):
    """The operation has no placement rule in the layout engine."""

    def __init__(self, hqslang: str) -> None:
        """Construct the error.

        Args:
            hqslang (str): Kind name of the unsupported operation.
        """
        self.hqslang = hqslang
        super().__init__(f"Operation not supported by the layout engine: {hqslang}.")


class NoQubitError(LayoutError):
    """The operation requires at least one qubit but none were given."""

    def __init__(self, description: str) -> None:
        """Construct the error.

        Args:
            description (str): Description of the offending operation.
        """
        self.description = description
        super().__init__(f"Operations with no qubit in the input: {description}")


class EmptyCircuitError(LayoutError):
    """The circuit produced no renderable page."""

    def __init__(self, msg: str = "The circuit produced no renderable page.") -> None:
        """Construct the error.

        Args:
            msg (str): Error message.
        """
        super().__init__(msg)


class ExternalError(LayoutError):
    """A failure of an external collaborator (figure rendering or file output).

    The underlying exception is kept as ``__cause__``.
    """
