from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.common import DeleteResult
from studio_booking.schemas.upgrade import Upgrade as UpgradeSchema, UpgradeCreate, UpgradeUpdate
from studio_booking.services import upgrades as upgrade_service

router = APIRouter(prefix="/admin/upgrades", tags=["Admin - Upgrades"])


@router.get("/", response_model=List[UpgradeSchema])
def list_upgrades(include_inactive: bool = Query(False), db: Session = Depends(get_db)):
    return upgrade_service.list_upgrades(db, include_inactive)


@router.post("/", response_model=UpgradeSchema, status_code=status.HTTP_201_CREATED)
def create_upgrade(data: UpgradeCreate, db: Session = Depends(get_db)):
    upgrade = upgrade_service.create_upgrade(db, **data.model_dump())
    db.commit()
    db.refresh(upgrade)
    return upgrade


@router.get("/{upgrade_id}", response_model=UpgradeSchema)
def get_upgrade(upgrade_id: UUID, db: Session = Depends(get_db)):
    return upgrade_service.get_upgrade(db, upgrade_id)


@router.patch("/{upgrade_id}", response_model=UpgradeSchema)
def update_upgrade(upgrade_id: UUID, data: UpgradeUpdate, db: Session = Depends(get_db)):
    upgrade = upgrade_service.update_upgrade(db, upgrade_id, **data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(upgrade)
    return upgrade


@router.delete("/{upgrade_id}", response_model=DeleteResult)
def delete_upgrade(upgrade_id: UUID, db: Session = Depends(get_db)):
    result = upgrade_service.delete_upgrade(db, upgrade_id)
    db.commit()
    return result
