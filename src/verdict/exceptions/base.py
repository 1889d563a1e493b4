from __future__ import annotations


class VerdictError(Exception):
    """Base exception class for all Verdict-specific errors.

    This is the root of the Verdict exception hierarchy. Every error the
    library raises on purpose inherits from this class, so a host can catch
    the whole family at its boundary while letting programming errors
    (``TypeError``, ``ValueError`` from bad construction calls) propagate.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            verdict = runner.eval(parse(rule_text))
        except VerdictError as e:
            logger.warning("rule_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the VerdictError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
