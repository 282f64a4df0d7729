from fastapi import APIRouter, Depends, HTTPException, Request

from priorityparcel.core.logging import get_logger
from priorityparcel.core.security import require_admin
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.routers.common import client_ip
from priorityparcel.schemas.offerte import PrijsOfferteCreate, PrijsOfferteOut, OfferteSubmissionOut
from priorityparcel.services.pricing import price_indication

router = APIRouter(prefix="/api/prijsofferte", tags=["prijsofferte"])
logger = get_logger(__name__)

@router.post("", response_model=OfferteSubmissionOut, status_code=201)
async def submit_prijsofferte(
    payload: PrijsOfferteCreate,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    indicatie = price_indication(payload.transport_type, payload.gewicht, payload.afmetingen, payload.spoed)
    payload = payload.model_copy(update={"prijs_indicatie": indicatie, "ip_address": client_ip(request)})
    saved = await storage.create_prijs_offerte(payload)
    logger.info("Prijsofferte id=%s (%s, %s kg, %s) -> %s",
                saved.id, saved.transport_type, saved.gewicht, saved.spoed, indicatie)
    return {
        "id": saved.id,
        "message": "Quote request submitted successfully",
        "prijs_indicatie": saved.prijs_indicatie,
    }

@router.get("", response_model=list[PrijsOfferteOut])
async def list_prijsoffertes(
    storage: Storage = Depends(get_storage),
    actor=Depends(require_admin),
):
    return await storage.list_prijs_offertes()

@router.get("/{offerte_id}", response_model=PrijsOfferteOut)
async def get_prijsofferte(
    offerte_id: int,
    storage: Storage = Depends(get_storage),
    actor=Depends(require_admin),
):
    offerte = await storage.get_prijs_offerte(offerte_id)
    if not offerte:
        raise HTTPException(status_code=404, detail="Prijsofferte not found")
    return offerte
