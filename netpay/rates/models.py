from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UNBOUNDED_LABEL = "Above previous"


def _plain_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class TaxBracket(BaseModel):
    """A slice of taxable income taxed at one marginal rate.

    ``limit`` is the width of the slice, not a cumulative threshold. Brackets
    are consumed one after another, so ``[490@0, 110@0.05]`` taxes the first
    490 at 0% and the next 110 at 5%. ``None`` marks the open-ended top slice.
    """

    limit: float | None = None
    rate: float

    model_config = ConfigDict(frozen=True)

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("bracket limit must be non-negative")
        return value

    @field_validator("rate")
    @classmethod
    def _validate_rate(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("bracket rate must be a fraction between 0 and 1")
        return value

    @property
    def unbounded(self) -> bool:
        return self.limit is None

    @property
    def label(self) -> str:
        if self.limit is None:
            return UNBOUNDED_LABEL
        return f"Next {_plain_number(self.limit)}"


class RateTable(BaseModel):
    """Mandatory contribution rate plus the ordered bracket schedule.

    Bracket order is whatever the table author supplied; nothing here sorts
    it. Instances are frozen and replaced wholesale on refresh.
    """

    mandatory_rate: float
    brackets: tuple[TaxBracket, ...]
    period_label: str
    provenance: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("mandatory_rate")
    @classmethod
    def _validate_mandatory_rate(cls, value: float) -> float:
        if not 0 <= value < 1:
            raise ValueError("mandatory rate must be a fraction in [0, 1)")
        return value

    @model_validator(mode="after")
    def _validate_brackets(self) -> "RateTable":
        if not self.brackets:
            raise ValueError("rate table needs at least one bracket")
        if not self.brackets[-1].unbounded:
            raise ValueError("last bracket must be unbounded (limit=None)")
        return self

    @property
    def is_live(self) -> bool:
        return self.provenance is not None

    def bracket_labels(self) -> list[str]:
        return [bracket.label for bracket in self.brackets]


__all__ = ["RateTable", "TaxBracket", "UNBOUNDED_LABEL"]
