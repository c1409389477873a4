import datetime as dt
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from domain.enums import DietDayStatus, SeverityColor


class DietDayInput(BaseModel):
    date: dt.date
    status: DietDayStatus = DietDayStatus.NOT_SAVED
    meals: List[Dict[str, Any]] = Field(default_factory=list)


class DietPlanUpsert(BaseModel):
    week_start_date: dt.date
    days: List[DietDayInput] = Field(..., min_length=1, max_length=7)

    @model_validator(mode="after")
    def days_inside_week(self):
        seen = set()
        for day in self.days:
            offset = (day.date - self.week_start_date).days
            if offset < 0 or offset > 6:
                raise ValueError(
                    f"{day.date} is outside the week starting {self.week_start_date}"
                )
            if day.date in seen:
                raise ValueError(f"Duplicate day {day.date}")
            seen.add(day.date)
        return self


class DietDayResponse(BaseModel):
    date: dt.date
    status: DietDayStatus
    meals: List[Dict[str, Any]] = []

    model_config = {"from_attributes": True}


class DietPlanResponse(BaseModel):
    plan_id: UUID
    client_id: UUID
    week_start_date: dt.date
    days: List[DietDayResponse]

    model_config = {"from_attributes": True}


class DietStatusResponse(BaseModel):
    client_id: UUID
    as_of: dt.date
    color: SeverityColor
    published: Dict[str, bool] = Field(
        ..., description="Publication flags keyed by ISO date for today, tomorrow and the day after"
    )
