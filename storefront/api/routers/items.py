from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import ItemNotFound
from storefront.domain.schemas import ItemEnvelope
from storefront.services.catalog_client import SqlCatalog

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/{item_id}", response_model=ItemEnvelope)
def get_item(item_id: int, db: Session = Depends(get_db)):
    """Read-only catalog lookup, also what HttpCatalogClient talks to."""
    item = SqlCatalog(db).find_item(item_id)
    if item is None:
        raise ItemNotFound(item_id)
    return {"message": "Item retrieved successfully", "item": item}
