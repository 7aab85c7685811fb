from __future__ import annotations

from datetime import datetime
from typing import Optional, List

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import (
    Integer,
    String,
    DateTime,
    func,
    JSON,
)


class Base(DeclarativeBase):
    pass


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[str] = mapped_column(
        String(16), nullable=False, index=True
    )  # 'movie', 'episode', 'trailer', ...
    title: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    official_rating: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    genres: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    studios: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    # NULL means the item does not carry tags/keywords/trailers at all.
    tags: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    keywords: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    trailer_ids: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    people: Mapped[Optional[List[dict]]] = mapped_column(
        JSON, nullable=True
    )  # [{"name": ..., "type": ..., "role": ...}]
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class UserHistory(Base):
    __tablename__ = "user_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    item_id: Mapped[int] = mapped_column(Integer, index=True)
    event_type: Mapped[str] = mapped_column(String(32))  # watched, played, completed
    ts: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
