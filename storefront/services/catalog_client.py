# storefront/services/catalog_client.py
from typing import Protocol

import requests
from pydantic import ValidationError as PydanticValidationError
from requests import RequestException
from sqlalchemy.orm import Session

from storefront.domain.errors import StoreFailure
from storefront.domain.schemas import CatalogItem
from storefront.repos.item_repo import ItemRepo
from storefront.utils.retry import http_retry
from storefront.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogClient(Protocol):
    def find_item(self, item_id: int) -> CatalogItem | None: ...


class SqlCatalog:
    """Catalog backed by the local items table."""

    def __init__(self, db: Session):
        self.repo = ItemRepo(db)

    def find_item(self, item_id: int) -> CatalogItem | None:
        item = self.repo.get_item(item_id)
        if item is None:
            return None
        return CatalogItem.model_validate(item)


class HttpCatalogClient:
    """Catalog served by another deployment over ``GET /items/{id}``."""

    def __init__(self, base_url: str, timeout: int = CATALOG_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _fetch(self, item_id: int) -> dict | None:
        url = f"{self.base_url}/items/{item_id}"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def find_item(self, item_id: int) -> CatalogItem | None:
        try:
            payload = self._fetch(item_id)
        except RequestException as e:
            logger.error(f"Catalog lookup for item {item_id} failed: {e}")
            raise StoreFailure()
        if payload is None:
            return None
        try:
            return CatalogItem.model_validate(payload["item"])
        except (KeyError, TypeError, PydanticValidationError) as e:
            logger.error(f"Catalog returned malformed item {item_id}: {e}")
            raise StoreFailure()


def build_catalog(db: Session) -> CatalogClient:
    if CATALOG_SERVICE_URL:
        return HttpCatalogClient(CATALOG_SERVICE_URL)
    return SqlCatalog(db)
