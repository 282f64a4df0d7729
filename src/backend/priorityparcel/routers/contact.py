from fastapi import APIRouter, Depends, HTTPException, Request

from priorityparcel.core.logging import get_logger
from priorityparcel.core.security import require_admin
from priorityparcel.db.session import get_storage
from priorityparcel.repositories.base import Storage
from priorityparcel.routers.common import client_ip
from priorityparcel.schemas.common import SubmissionOut
from priorityparcel.schemas.contact import ContactMessageCreate, ContactMessageOut

router = APIRouter(prefix="/api/contact", tags=["contact"])
logger = get_logger(__name__)

@router.post("", response_model=SubmissionOut, status_code=201)
async def submit_contact(
    payload: ContactMessageCreate,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    payload = payload.model_copy(update={"ip_address": client_ip(request)})
    saved = await storage.create_contact_message(payload)
    logger.info("Contact message id=%s from %s", saved.id, saved.email)
    return {"id": saved.id, "message": "Contact message submitted successfully"}

@router.get("", response_model=list[ContactMessageOut])
async def list_contact_messages(
    storage: Storage = Depends(get_storage),
    actor=Depends(require_admin),
):
    return await storage.list_contact_messages()

@router.get("/{message_id}", response_model=ContactMessageOut)
async def get_contact_message(
    message_id: int,
    storage: Storage = Depends(get_storage),
    actor=Depends(require_admin),
):
    msg = await storage.get_contact_message(message_id)
    if not msg:
        raise HTTPException(status_code=404, detail="Contact message not found")
    return msg
