"""Password hashing with bcrypt."""

from __future__ import annotations

from dataclasses import dataclass

import bcrypt

MIN_COST = 4
MAX_COST = 31
DEFAULT_COST = 10
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class EqualsParam:
    hashed: str
    value: str


class BcryptHash:
    """Hashes and checks passwords at a fixed bcrypt cost."""

    def __init__(self, cost: int) -> None:
        self.cost = cost

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of the password.

        Raises ValueError for a cost above the maximum or a password longer
        than 72 bytes. A cost below the minimum falls back to the default.
        """
        cost = DEFAULT_COST if self.cost < MIN_COST else self.cost
        if cost > MAX_COST:
            raise ValueError(f"bcrypt: cost {cost} is outside allowed range ({MIN_COST},{MAX_COST})")
        raw = password.encode()
        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValueError("bcrypt: password length exceeds 72 bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=cost)).decode("ascii")

    def equal(self, param: EqualsParam) -> bool:
        """Tell whether the plain value matches the stored hash."""
        raw = param.value.encode()
        if len(raw) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, param.hashed.encode())
        except ValueError:
            return False