from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from cinema.channels.trailers import SupporterEntitlement
from cinema.core.interfaces import RemoteTrailerError
from cinema.core.models import UserContext
from cinema.core.selection import DefaultIntroProvider
from cinema.db.library import SqlLibrary
from cinema.db.session import get_db

router = APIRouter(prefix="/intros", tags=["intros"])
logger = logging.getLogger(__name__)


class IntroOut(BaseModel):
    item_id: Optional[str] = None
    path: Optional[str] = None


class IntrosOut(BaseModel):
    item_id: int
    intros: List[IntroOut]


def get_library(db: Session = Depends(get_db)) -> SqlLibrary:
    return SqlLibrary(db)


def get_intro_provider(
    request: Request, library: SqlLibrary = Depends(get_library)
) -> DefaultIntroProvider:
    return DefaultIntroProvider(
        library=library,
        entitlement=SupporterEntitlement(),
        channel=getattr(request.app.state, "trailer_channel", None),
    )


@router.get("/provider")
def get_provider_name(provider: DefaultIntroProvider = Depends(get_intro_provider)):
    return {"name": provider.name}


@router.get("/custom-files")
def get_custom_intro_files(
    provider: DefaultIntroProvider = Depends(get_intro_provider),
):
    """List every custom intro clip under the configured directory."""
    return {"files": provider.get_all_intro_files()}


@router.get("/{item_id}", response_model=IntrosOut)
async def get_intros(
    item_id: int,
    user_id: str = Query(..., description="User about to watch the item"),
    library: SqlLibrary = Depends(get_library),
    provider: DefaultIntroProvider = Depends(get_intro_provider),
):
    """Pick the intros to play before *item_id* for *user_id*."""
    target = library.get_item(item_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Item not found")

    try:
        intros = await provider.get_intros(target, UserContext(user_id=user_id))
    except RemoteTrailerError as exc:
        logger.warning("Intro selection for item %s failed: %s", item_id, exc)
        raise HTTPException(
            status_code=503, detail="Trailer service unavailable; retry later"
        ) from exc

    return IntrosOut(
        item_id=item_id,
        intros=[IntroOut(item_id=intro.item_id, path=intro.path) for intro in intros],
    )
