"""Provider base class."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests may replace with in-memory implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Dishka provider tagged with its swappable component, if any."""

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
