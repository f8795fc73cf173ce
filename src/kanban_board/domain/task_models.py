from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import date
from typing import List, Optional

class Stage(str, Enum):
    todo = "todo"
    progress = "progress"
    done = "done"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]

    @property
    def position(self) -> int:
        return STAGE_ORDER.index(self)

    def shifted(self, direction: int) -> Optional["Stage"]:
        """Neighbouring stage in board order, or None past either edge."""
        idx = self.position + direction
        if idx < 0 or idx >= len(STAGE_ORDER):
            return None
        return STAGE_ORDER[idx]

STAGE_ORDER = (Stage.todo, Stage.progress, Stage.done)
STAGE_LABELS = {Stage.todo: "To Do", Stage.progress: "In Progress", Stage.done: "Done"}

class TaskCreate(BaseModel):
    title: str = ""
    desc: str = ""

class Task(BaseModel):
    # Field names follow the stored record: desc / col.
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int = Field(gt=0)
    title: str = Field(min_length=1)
    description: str = Field(default="", alias="desc")
    stage: Stage = Field(alias="col")
    date: str = ""

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is blank")
        return value

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

class Snapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: List[Task] = Field(default_factory=list)
    next_id: int = Field(default=1, alias="nextId", ge=1)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

def date_label(day: date) -> str:
    """Short card date, e.g. "Feb 5"."""
    return f"{day:%b} {day.day}"
