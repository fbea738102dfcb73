"""Single-value wrappers."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one primitive, serialized as the primitive."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
