"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One API operation: takes a request model, returns a response model.

    Use cases translate string IDs at the boundary into typed identifiers
    and leave storage and concurrency rules to the domain services.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...
