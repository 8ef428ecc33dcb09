from pydantic import BaseModel, Field, field_validator


class TimePreference(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time_slot: int = Field(ge=0, le=4)
    # An end before the start is stored as given and covers no slot.
    end_time_slot: int = Field(ge=0, le=4)

    def covers(self, day_of_week: int, time_slot: int) -> bool:
        return (
            self.day_of_week == day_of_week
            and self.start_time_slot <= time_slot <= self.end_time_slot
        )


def normalize_skills(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    seen: set[str] = set()
    skills: list[str] = []
    for item in value:
        skill = item.strip()
        if not skill or skill.lower() in seen:
            continue
        seen.add(skill.lower())
        skills.append(skill)
    return skills


class TeacherBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    specialization: str | None = Field(default=None, max_length=200)
    skills: list[str] = Field(default_factory=list, max_length=100)
    time_preferences: list[TimePreference] = Field(default_factory=list, max_length=100)

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, value: list[str]) -> list[str]:
        return normalize_skills(value)


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    specialization: str | None = Field(default=None, max_length=200)
    skills: list[str] | None = Field(default=None, max_length=100)
    time_preferences: list[TimePreference] | None = Field(default=None, max_length=100)

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, value: list[str] | None) -> list[str] | None:
        return normalize_skills(value)


class TeacherOut(TeacherBase):
    id: int

    model_config = {"from_attributes": True}

    def prefers(self, day_of_week: int, time_slot: int) -> bool:
        """A teacher without stored preferences is happy with any slot."""
        if not self.time_preferences:
            return True
        return any(pref.covers(day_of_week, time_slot) for pref in self.time_preferences)
