"""Keys, results and an uncached loader driven by a batch function."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UuidKey:
    """A loader key wrapping a UUID."""

    value: uuid.UUID

    def __str__(self) -> str:
        return str(self.value)

    def raw(self) -> uuid.UUID:
        """Return the wrapped UUID."""
        return self.value


@dataclass
class BatchResult:
    """The outcome for one key of a batch: data or an error."""

    data: Any = None
    error: BaseException | None = None


BatchFunction = Callable[[list[Any]], Sequence[BatchResult]]


class BatchLoader:
    """Resolves keys through a batch function; nothing is cached."""

    def __init__(self, batch_fn: BatchFunction) -> None:
        self._batch_fn = batch_fn

    def load(self, key: Any) -> Any:
        """Load one key, returning its data or raising its error."""
        (result,) = self._dispatch([key])
        if result.error is not None:
            raise result.error
        return result.data

    def _dispatch(self, keys: list[Any]) -> list[BatchResult]:
        results = list(self._batch_fn(keys))
        if len(results) == len(keys):
            return results
        if len(results) == 1 and results[0].error is not None:
            return [results[0]] * len(keys)
        raise ValueError(
            "The batch function supplied did not return an array of responses "
            f"the same length as the array of keys: {len(keys)} keys, "
            f"{len(results)} values"
        )