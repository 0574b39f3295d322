"""Result 타입.

예외 대신 값으로 실패를 표현하는 성공/실패 래퍼입니다.
도메인 값 객체와 Aggregate의 생성은 예외를 던지지 않고 Result를 반환합니다.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """성공 Result."""

    _value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> Any:
        raise ValueError("성공한 Result에서는 error를 가져올 수 없습니다")

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """성공 값을 변환합니다."""
        return Ok(fn(self._value))

    def flat_map(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        """Result를 반환하는 함수를 연결합니다."""
        return fn(self._value)

    def match(self, ok: Callable[[T], U], fail: Callable[[Any], U]) -> U:
        return ok(self._value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """실패 Result."""

    _error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> Any:
        raise ValueError("실패한 Result에서는 value를 가져올 수 없습니다")

    @property
    def error(self) -> E:
        return self._error

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def flat_map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def match(self, ok: Callable[[Any], U], fail: Callable[[E], U]) -> U:
        return fail(self._error)


Result = Ok[T] | Err[E]


def ok(value: T = None) -> Ok[T]:  # type: ignore[assignment]
    """성공 Result를 생성합니다."""
    return Ok(value)


def fail(error: E) -> Err[E]:
    """실패 Result를 생성합니다."""
    return Err(error)


def combine(results: Iterable["Result[Any, E]"]) -> "Result[None, E]":
    """여러 Result를 결합합니다.

    Args:
        results: 검사할 Result 목록

    Returns:
        첫 번째 실패 Result, 모두 성공이면 값이 없는 성공 Result
    """
    for result in results:
        if result.is_failure:
            return result  # type: ignore[return-value]
    return Ok(None)
