# storefront/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.enums import Role
from storefront.domain.errors import AccessDenied, Unauthenticated
from storefront.domain.principal import Principal
from storefront.services.catalog_client import build_catalog
from storefront.services.order_service import OrderService
from storefront.services.price_service import PriceService
from storefront.utils.settings import IDENTITY_USER_HEADER, IDENTITY_ROLE_HEADER


class HeaderIdentity:
    """
    Czyta principal z naglowkow ustawionych przez gateway/uslugi auth.
    Nazwy naglowkow przychodza z konfiguracji przy starcie.
    """

    def __init__(self, user_header: str, role_header: str):
        self.user_header = user_header
        self.role_header = role_header

    def __call__(self, request: Request) -> Principal:
        raw_id = request.headers.get(self.user_header)
        if not raw_id:
            raise Unauthenticated("Access denied. No credentials provided.")
        try:
            user_id = int(raw_id)
        except ValueError:
            raise Unauthenticated("Invalid credentials.")

        raw_role = request.headers.get(self.role_header, Role.USER.value)
        try:
            role = Role(raw_role)
        except ValueError:
            raise Unauthenticated("Invalid credentials.")

        return Principal(id=user_id, role=role)


get_principal = HeaderIdentity(IDENTITY_USER_HEADER, IDENTITY_ROLE_HEADER)


def require_role(role: Role):
    def checker(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role is not role:
            raise AccessDenied(f"Access denied. {role.value.capitalize()} role required.")
        return principal

    return checker


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db, catalog=build_catalog(db))


def get_price_service(db: Session = Depends(get_db)) -> PriceService:
    return PriceService(db)
