"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from src.core.shared_types import Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    room_name: Mapped[str]
    players: Mapped[list[str]] = mapped_column(JSON, default=list)
    registered_colors: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    step: Mapped[int] = mapped_column(default=0)
    status: Mapped[str] = mapped_column(default=Status.AWAITING_COLORS.value)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    rounds: Mapped[list["DBRound"]] = relationship(
        back_populates="game",
        order_by="DBRound.step",
        cascade="all, delete-orphan",
    )


class DBRound(Base):
    """One history entry. (game_id, step) is unique: a second writer for the same step fails at commit."""

    __tablename__ = "rounds"
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"), primary_key=True)
    step: Mapped[int] = mapped_column(primary_key=True)
    board_white: Mapped[list[str]] = mapped_column(JSON)
    board_black: Mapped[list[str]] = mapped_column(JSON)
    prev_piece_white: Mapped[int] = mapped_column(default=-1)
    prev_piece_black: Mapped[int] = mapped_column(default=-1)
    en_passant: Mapped[int] = mapped_column(default=-1)
    check: Mapped[bool] = mapped_column(default=False)
    winner: Mapped[str] = mapped_column(default="")
    has_king_moved: Mapped[bool] = mapped_column(default=False)
    has_left_rook_moved: Mapped[bool] = mapped_column(default=False)
    has_right_rook_moved: Mapped[bool] = mapped_column(default=False)
    castle_left: Mapped[bool] = mapped_column(default=False)
    castle_right: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    game: Mapped[DBGame] = relationship(back_populates="rounds")
