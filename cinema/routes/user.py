from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session
from cinema.db.session import get_db
from cinema.db.models import UserHistory

router = APIRouter(prefix="/user", tags=["user"])


class HistoryIn(BaseModel):
    user_id: str
    items: List[int]  # library Item.id values
    event_type: str = "watched"


@router.post("/history")
def post_history(payload: HistoryIn, db: Session = Depends(get_db)):
    event_type = payload.event_type.strip().lower() or "watched"
    for iid in dict.fromkeys(payload.items):
        db.add(
            UserHistory(
                user_id=payload.user_id,
                item_id=iid,
                event_type=event_type,
            )
        )
    db.commit()
    return {"ok": True, "user_id": payload.user_id, "recorded": len(set(payload.items))}
