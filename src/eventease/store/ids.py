"""Record identity generation."""

from __future__ import annotations

import itertools
import random
import string
import time
import uuid
from abc import ABC, abstractmethod

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator(ABC):
    """Produces record identities for the store."""

    @abstractmethod
    def new_id(self, prefix: str) -> str:
        """Return a fresh identity such as ``evt_...``."""


class TokenIdGenerator(IdGenerator):
    """Timestamp + counter + random token identities.

    The per-instance counter keeps ids distinct when many records are
    created within the same millisecond; the random token keeps separate
    generator instances from colliding. Not suitable where ids must be
    unguessable.
    """

    def __init__(self, token_length: int = 9, rng: random.Random | None = None) -> None:
        self.token_length = token_length
        self._rng = rng or random.Random()
        self._counter = itertools.count(1)

    def new_id(self, prefix: str) -> str:
        millis = int(time.time() * 1000)
        token = "".join(self._rng.choices(_TOKEN_ALPHABET, k=self.token_length))
        return f"{prefix}_{millis}_{next(self._counter):x}{token}"


class UUIDIdGenerator(IdGenerator):
    """Random UUID4 identities."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex}"
