# inventory_tracker/routes/reasons.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from inventory_tracker.database import get_db
from inventory_tracker.models.users import User
from inventory_tracker.services.catalog import CatalogManager
from inventory_tracker.utils.tokenJWT import get_current_user
from inventory_tracker.utils.audit import write_log, client_ip
from inventory_tracker.schemas.reason import ReasonCreate, ReasonUpdate, ReasonOut

router = APIRouter(prefix="/reasons", tags=["Reasons"])


@router.get("", response_model=List[ReasonOut])
def list_reasons(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CatalogManager(db).list_reasons()


@router.get("/{reason_id}", response_model=ReasonOut)
def get_reason(reason_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CatalogManager(db).get_reason(reason_id)


@router.post("", response_model=ReasonOut, status_code=201)
def create_reason(
    payload: ReasonCreate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    reason = CatalogManager(db).create_reason(payload)
    write_log(db, user_id=current_user.id, action="REASON_CREATE", resource="reasons",
              status="SUCCESS", ip=client_ip(request), meta={"id": reason.id, "name": reason.name})
    return reason


@router.put("/{reason_id}", response_model=ReasonOut)
def update_reason(
    reason_id: int, payload: ReasonUpdate, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    reason = CatalogManager(db).update_reason(reason_id, payload)
    write_log(db, user_id=current_user.id, action="REASON_UPDATE", resource="reasons",
              status="SUCCESS", ip=client_ip(request), meta={"id": reason.id})
    return reason


# Hard delete; existing movements keep pointing at the removed id
@router.delete("/{reason_id}")
def delete_reason(
    reason_id: int, request: Request,
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user),
):
    name = CatalogManager(db).delete_reason(reason_id)
    write_log(db, user_id=current_user.id, action="REASON_DELETE", resource="reasons",
              status="SUCCESS", ip=client_ip(request), meta={"id": reason_id, "name": name})
    return {"detail": f"Reason '{name}' deleted"}
