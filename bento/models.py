from enum import Enum
from typing import Literal, Self, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Mode(Enum):
    week = "week"
    five = "five"


class InputField(Enum):
    ingredients = "ingredients"
    grandma_vegetables = "grandma_vegetables"
    usual_ingredients = "usual_ingredients"


class Subject(Enum):
    receipt = "receipt"
    food = "food"


class PlanModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BentoItem(PlanModel):
    name: str
    recipe_url: str


class DayPlan(PlanModel):
    day: str
    point: str
    mains: list[BentoItem]
    sides: list[BentoItem]

    @model_validator(mode="after")
    def has_dishes(self) -> Self:
        if not (self.mains or self.sides):
            raise ValueError(f"No mains or sides for {self.day}.")
        return self


class WeekPlan(PlanModel):
    days: list[DayPlan] = Field(min_length=1)
    shopping_list: list[str]
    prep_list: list[str]


class FiveDayEntry(PlanModel):
    name: str
    description: str
    make_ahead: str
    point: str
    mains: list[BentoItem]
    sides: list[BentoItem]


class WeekResponse(PlanModel):
    mode: Literal[Mode.week] = Mode.week
    week_data: WeekPlan


class FiveResponse(PlanModel):
    mode: Literal[Mode.five] = Mode.five
    five_data: list[FiveDayEntry] = Field(min_length=1)


ApiResponse: TypeAlias = WeekResponse | FiveResponse
