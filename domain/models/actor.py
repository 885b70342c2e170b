"""
Authenticated caller identity.

Roles are checked once at the API boundary and then passed to use cases
as a typed Actor rather than an untyped session dictionary.
"""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Closed set of portal roles."""

    TRAINER = "TRAINER"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class Actor:
    """The user on whose behalf an operation runs."""

    user_id: str
    role: Role = Role.CLIENT

    @property
    def is_trainer(self) -> bool:
        return self.role == Role.TRAINER
