from pydantic import BaseModel, Field


class ProgramBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=20)
    description: str | None = None
    total_semesters: int = Field(default=8, ge=1, le=8)


class ProgramCreate(ProgramBase):
    pass


class ProgramOut(ProgramBase):
    id: int

    model_config = {"from_attributes": True}
