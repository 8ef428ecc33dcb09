from pydantic import BaseModel, Field


class CourseBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    credits: int = Field(ge=0, le=40)
    description: str | None = None
    color: str = Field(min_length=1, max_length=32)
    is_core: bool = True
    program_id: int
    semester: int = Field(ge=1, le=8)
    teacher_id: int | None = None


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    code: str | None = Field(default=None, min_length=1, max_length=50)
    credits: int | None = Field(default=None, ge=0, le=40)
    description: str | None = None
    color: str | None = Field(default=None, min_length=1, max_length=32)
    is_core: bool | None = None
    program_id: int | None = None
    semester: int | None = Field(default=None, ge=1, le=8)
    teacher_id: int | None = None


class CourseOut(CourseBase):
    id: int

    model_config = {"from_attributes": True}
