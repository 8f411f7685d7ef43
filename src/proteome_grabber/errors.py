"""Exceptions raised by proteome-grabber.

Only caller errors and integrity failures escape a retrieval; everything
else is reported through a soft ``RetrievalOutcome``.
"""


class ProteomeGrabberError(Exception):
    """Base class for all proteome-grabber errors."""


class UnknownDatabaseError(ProteomeGrabberError, ValueError):
    def __init__(self, db: str, choices):
        self.db = db
        super().__init__(
            f"Unknown database '{db}'. Please select one of: {', '.join(choices)}."
        )


class OrganismNotFoundError(ProteomeGrabberError, LookupError):
    """No assembly record matched the organism query."""


class ChecksumMismatchError(ProteomeGrabberError):
    def __init__(self, file_path: str, expected: str, actual: str):
        self.file_path = file_path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The md5 hash of '{file_path}' ({actual or 'n/a'}) does not match "
            f"the hash stored in the remote checksum manifest ({expected or 'missing'}). "
            "Please download the file again."
        )


class DecompressionError(ProteomeGrabberError):
    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        super().__init__(f"'{file_path}' could not be decompressed: {reason}")
