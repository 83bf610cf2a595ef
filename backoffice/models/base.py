"""Shared model plumbing: camelCase wire format, canonical pages, batch results."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

EntityId = int | str


class ApiModel(BaseModel):
    """Snake_case in Python, camelCase on the wire. Unknown backend keys are dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=False,
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Page(BaseModel, Generic[T]):
    """Canonical list shape, whatever the endpoint actually returned."""

    items: list[T]
    total: int
    page: int = 1
    page_size: int = 0


class BatchItemResult(BaseModel):
    index: int
    success: bool
    error: str | None = None
    item: Any = None


class BatchResult(BaseModel):
    results: list[BatchItemResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def summary(self) -> dict:
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.model_dump(exclude={"item"}) for r in self.results],
        }
