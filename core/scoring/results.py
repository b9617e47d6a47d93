"""
Tagged results returned by the scoring adapter.

Every capability returns either ``Ok(data)`` with a validated pydantic model
or ``Err(reason, raw)`` carrying the raw model output for auditing. Callers
branch on ``result.ok`` and never see a half-parsed payload.
"""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T
    raw: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str
    raw: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def data(self) -> Any:
        return None


AdapterResult = Union[Ok[T], Err]
