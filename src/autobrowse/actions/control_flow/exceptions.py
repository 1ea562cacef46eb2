"""Control flow exceptions for loop control.

``break`` and ``continue`` actions are signalled by raising these
exceptions. They unwind every enclosing sequence and ``if``/``else`` body up
to the nearest ``for`` loop, which handles them. They are not
:class:`~autobrowse.base_exceptions.AutobrowseException` subclasses, so
error handling for failed actions never catches them.
"""


class BreakLoop(Exception):
    """Exception raised to break out of the nearest loop.

    Attributes:
        message: A descriptive message explaining why the loop was broken
        loop_id: Id of the loop being broken

    Example:
        >>> raise BreakLoop("Break triggered", loop_id="i#1")
    """

    def __init__(self, message: str = "Loop break triggered", loop_id: str | None = None) -> None:
        self.message = message
        self.loop_id = loop_id
        super().__init__(self.message)


class ContinueLoop(Exception):
    """Exception raised to continue with the next iteration of the nearest loop.

    Any remaining nodes in the current iteration are skipped.

    Attributes:
        message: A descriptive message explaining why the iteration was skipped
        loop_id: Id of the loop being continued
    """

    def __init__(
        self, message: str = "Loop continue triggered", loop_id: str | None = None
    ) -> None:
        self.message = message
        self.loop_id = loop_id
        super().__init__(self.message)
