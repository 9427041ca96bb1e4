"""
Envelope returned by every mutation.
"""
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class MessageResponse(BaseModel, Generic[T]):
    """Mutation result: a human-readable message plus the affected record."""
    message: str = Field(..., description="What happened")
    data: T = Field(..., description="The affected record")
