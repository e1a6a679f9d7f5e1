"""Wire the layers together: logging, a database session and the service on top of it."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from src.core.logging import configure_logging
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessService
from src.services.locks import GameLocks
from src.services.notifier import SessionNotifier

logger = logging.getLogger(__name__)


def build_service(
    db: Session,
    notifier: Optional[SessionNotifier] = None,
    locks: Optional[GameLocks] = None,
) -> ChessService:
    """
    One ChessService per database session.

    Pass the same GameLocks to every service of a process, so that two requests for the same game never overlap.
    """
    configure_logging()
    logger.debug("building chess service (notifier=%s)", type(notifier).__name__)
    return ChessService(SQLGameRepository(db), notifier=notifier, locks=locks)
