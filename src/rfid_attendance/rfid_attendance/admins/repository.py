from __future__ import annotations

from typing import Protocol, Sequence


class AdminRepository(Protocol):
    """Administrators are only needed as notification recipients here."""

    def list_ids(self) -> Sequence[int]:
        raise NotImplementedError
