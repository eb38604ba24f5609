"""Repository for the User aggregate."""

from tailoring.domain import tailoring
from tailoring.people.user import User
from tailoring.utils.query import load_all


@tailoring.repository(part_of=User)
class UserRepository:
    def find_by_role(self, role: str) -> list[User]:
        """Every user holding ``role``, newest registration first."""
        users = load_all(self._dao.query.filter(role=role))
        return sorted(users, key=lambda user: user.created_at, reverse=True)

    def find_by_email(self, email: str) -> User | None:
        matches = self._dao.query.filter(email=email.strip().lower()).all().items
        return matches[0] if matches else None
