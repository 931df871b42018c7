# Services package for the onboarding intake API

from .onboarding_service import SubmissionResult, process_submission

__all__ = [
    "SubmissionResult",
    "process_submission",
]
