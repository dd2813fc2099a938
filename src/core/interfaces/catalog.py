"""Store catalog contract.

`fetch` is synchronous: the validation loop is interactive and performs
exactly one request per attempt.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CatalogClient(Protocol):
    """Minimal contract for the remote catalog transport.

    Design rules:
    - One GET per call, no retries (retry policy belongs to the caller).
    - Returns the raw body, or `None` when the transport failed or nothing
      was received.
    """

    def fetch(self, app_id: str) -> bytes | None:
        ...
