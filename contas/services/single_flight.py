"""Per-instance busy flag for mutating operations."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from contas.domain.errors import OperationInProgressError

IN_PROGRESS_MESSAGE = "Aguarde a operacao em andamento terminar."


class SingleFlight:
    """At most one guarded block runs at a time; a second entry is rejected."""

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def ensure_idle(self) -> None:
        if self._busy:
            raise OperationInProgressError(IN_PROGRESS_MESSAGE)

    @contextmanager
    def claim(self) -> Iterator[None]:
        self.ensure_idle()
        self._busy = True
        try:
            yield
        finally:
            self._busy = False
