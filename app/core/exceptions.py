"""Errors raised by the onboarding pipeline.

Every error carries the HTTP status the submit endpoint answers with; the
message is passed through to the caller verbatim.
"""


class OnboardingError(Exception):
    """Base exception for the submission pipeline"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingRequiredField(OnboardingError):
    """Business profile or business name absent"""

    status_code = 400


class InvalidFilePayload(OnboardingError):
    """A file entry lacks data, name or type, or its data is not valid base64"""

    status_code = 400


class StorageWriteFailure(OnboardingError):
    """Object storage rejected or failed a write"""

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


class SerializationFailure(OnboardingError):
    """A summary spreadsheet could not be built or serialized"""

    pass
