from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_EXCEPTION_DEPTH = 64


class StatusSettings(BaseModel):
    """Tunables for the in-memory status sink."""

    max_exception_depth: int = Field(
        DEFAULT_MAX_EXCEPTION_DEPTH,
        ge=1,
        description="Inner exceptions rendered before the chain is cut off.",
    )
    break_on_exception: bool = False
    newline: str = "\n"

    @field_validator("newline")
    @classmethod
    def check_newline(cls, v):
        if v not in ("\n", "\r\n"):
            raise ValueError("newline must be '\\n' or '\\r\\n'")
        return v
