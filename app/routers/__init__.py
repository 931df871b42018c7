# Routers package for the onboarding intake API

from . import submit

__all__ = ["submit"]
