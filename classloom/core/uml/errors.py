"""Error taxonomy for the analysis pipeline.

Each error also derives from the closest builtin so callers that only
know about OSError / ValueError still catch them.
"""

from typing import Optional


class ClassloomError(Exception):
    """Base class for all classloom errors."""


class UnreadableInput(ClassloomError, OSError):
    """A source file or directory could not be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Cannot read source input: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class DanglingEndpoint(ClassloomError, ValueError):
    """A relationship references a classifier absent from its diagram."""

    def __init__(self, message: str, relationship=None):
        self.relationship = relationship
        super().__init__(message)


class UnsupportedOutputTarget(ClassloomError, ValueError):
    """The generation output path is not a directory or cannot be created."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Output path is not a usable directory: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class GenerationIOError(ClassloomError, OSError):
    """A write failed partway through a multi-file generation run.

    Files written before the failure are left in place; ``files_written``
    tells the caller how many there were.
    """

    def __init__(self, files_written: int, path: Optional[str] = None, reason: str = ""):
        self.files_written = files_written
        self.path = path
        message = f"Code generation failed after {files_written} file(s)"
        if path:
            message = f"{message} while writing {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
