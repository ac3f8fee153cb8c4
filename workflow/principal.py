from dataclasses import dataclass

from users.models import User

Role = User.Roles


@dataclass(frozen=True)
class Principal:
    """
    The authenticated actor of a single request.

    Built once by the view layer and passed explicitly into every
    orchestrator call; business logic never reads ``request.user``.
    """
    user_id: int
    role: str
    enabled: bool = True

    @classmethod
    def from_user(cls, user):
        return cls(user_id=user.pk, role=Role(user.role), enabled=user.enabled)

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def owns(self, owner_id):
        return self.user_id == owner_id
