# app/schemas/onboarding.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class FilePayload(BaseModel):
    """Eén geüpload document zoals de frontend het meestuurt (base64 in `data`)."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> Optional["FilePayload"]:
        """
        Geeft een FilePayload terug als `value` een object met niet-lege `data` is.
        Alles zonder data telt als "niet aangeleverd" en levert None op.
        """
        if not isinstance(value, dict) or not value.get("data"):
            return None
        return cls(
            data=_as_text(value.get("data")),
            name=_as_text(value.get("name")),
            type=_as_text(value.get("type")),
        )


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class SubmitResponse(BaseModel):
    message: str
    folder: str
    files: List[str] = []


class ErrorResponse(BaseModel):
    error: str
