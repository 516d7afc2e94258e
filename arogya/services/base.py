from contextlib import contextmanager
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import DataOperationError
from ..core.security import Identity

logger = logging.getLogger(__name__)


class ScopedService:
    """Base for the per-view services.

    Every query a subclass issues is filtered by ``self.identity.id`` (or a
    foreign key to it); the backend's row-level policies enforce the same
    rule server-side.
    """

    def __init__(self, db: Session, identity: Identity):
        self.db = db
        self.identity = identity

    @contextmanager
    def operation(self, failure: str):
        """Run one database call; on failure roll back, log and surface
        ``failure`` to the client. No retry."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{failure} (identity={self.identity.id}): {str(e)}")
            raise DataOperationError(failure)
