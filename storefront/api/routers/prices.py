# storefront/api/routers/prices.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_price_service, require_role
from storefront.domain.enums import Role
from storefront.domain.principal import Principal
from storefront.domain.schemas import PriceEnvelope, PriceIn, PriceListOut, PriceOut, PriceUpdate
from storefront.services.price_service import PriceService

router = APIRouter(prefix="/prices", tags=["prices"])

admin_only = require_role(Role.ADMIN)


@router.get("/", response_model=PriceListOut)
def list_prices(svc: PriceService = Depends(get_price_service)):
    prices = svc.list_prices()
    return {"message": "Prices retrieved successfully", "prices": [PriceOut.model_validate(p) for p in prices], "count": len(prices)}


@router.get("/{price_id}", response_model=PriceEnvelope)
def get_price(price_id: int, svc: PriceService = Depends(get_price_service)):
    return {"message": "Price retrieved successfully", "price": PriceOut.model_validate(svc.get_price(price_id))}


@router.post("/", response_model=PriceEnvelope, status_code=201)
def add_price(
    payload: PriceIn,
    _: Principal = Depends(admin_only),
    svc: PriceService = Depends(get_price_service),
):
    return {"message": "Price added successfully", "price": PriceOut.model_validate(svc.add_price(payload))}


@router.put("/{price_id}", response_model=PriceEnvelope)
def update_price(
    price_id: int,
    payload: PriceUpdate,
    _: Principal = Depends(admin_only),
    svc: PriceService = Depends(get_price_service),
):
    return {"message": "Price updated successfully", "price": PriceOut.model_validate(svc.update_price(price_id, payload))}


@router.delete("/{price_id}", response_model=PriceEnvelope)
def deactivate_price(
    price_id: int,
    _: Principal = Depends(admin_only),
    svc: PriceService = Depends(get_price_service),
):
    return {"message": "Price deactivated successfully", "price": PriceOut.model_validate(svc.deactivate_price(price_id))}
