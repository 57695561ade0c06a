"""Credit requests, one variant per action."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, RootModel


class CheckCreditsRequest(BaseModel):
    action: Literal["check_only"]


class DeductCreditsRequest(BaseModel):
    action: Literal["deduct"]
    amount: int = Field(gt=0)
    operation_type: str = Field(min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)


CreditsRequest = Annotated[
    Union[CheckCreditsRequest, DeductCreditsRequest],
    Field(discriminator="action"),
]


class CreditsBody(RootModel[CreditsRequest]):
    pass


class CreditsResult(BaseModel):
    allowed: bool
    remaining: int
    transaction_id: str | None = None
