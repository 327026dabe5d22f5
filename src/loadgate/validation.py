"""Success-or-failure result used where a lookup may legitimately miss."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str


Validation = Union[Success[T], Failure]
