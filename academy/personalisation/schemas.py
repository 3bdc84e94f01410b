from pydantic import BaseModel, ConfigDict, Field


class PersonalisedTextBase(BaseModel):
    """A feedback template as exchanged over the API and in template files."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    type: str = Field(..., min_length=1)
    average: list[float]
    first_part_text: str
    second_part_text: str


class PersonalisedTextResponse(PersonalisedTextBase):
    id: int
    average: list
