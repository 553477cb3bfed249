from __future__ import annotations

from typing import Iterable, Optional, Protocol

from .model import Student, User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def existing_ids(self, student_ids: Iterable[int]) -> set[int]:
        """Subset of ``student_ids`` that resolve to a student."""

        raise NotImplementedError
