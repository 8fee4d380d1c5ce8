"""Models for the spreadsheet endpoint payload."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

RawRow = dict[str, object]


class SheetPayload(BaseModel):
    """Envelope returned by the spreadsheet web app."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    error: str | None = None
    weight: list[RawRow] = Field(default_factory=list)
    kbju: list[RawRow] = Field(default_factory=list)

    @field_validator("weight", "kbju", mode="before")
    @classmethod
    def none_as_empty(cls, value: object) -> object:
        return [] if value is None else value
