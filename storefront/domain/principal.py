from dataclasses import dataclass

from storefront.domain.enums import Role


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, supplied by the identity layer in front of the service."""

    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
