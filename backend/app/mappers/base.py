"""
Generic CRUD mapper over the Flask-SQLAlchemy session.

Services talk to mappers instead of model query attributes so that the
persistence layer can be replaced with a fake in tests.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from app import db

logger = logging.getLogger(__name__)


class BaseMapper:
    """CRUD operations for a single model class."""

    model = None

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def insert(self, entity) -> bool:
        """Persist a new entity. Returns False (and rolls back) on a DB error."""
        try:
            self.session.add(entity)
            self.session.commit()
            return True
        except SQLAlchemyError:
            self.session.rollback()
            logger.error('Insert failed for %s', self.model.__name__, exc_info=True)
            return False

    def select_by_id(self, entity_id):
        return self.session.get(self.model, entity_id)

    def select_one(self, **filters):
        return self.session.query(self.model).filter_by(**filters).first()

    def select_list(self, *order_by, **filters):
        query = self.session.query(self.model).filter_by(**filters)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def exists(self, **filters) -> bool:
        return self.session.query(
            self.session.query(self.model).filter_by(**filters).exists()
        ).scalar()

    def update_by_id(self, entity_id, values: dict) -> bool:
        """Apply `values` to the row. Returns False if the row is missing or the write fails."""
        try:
            count = (self.session.query(self.model)
                     .filter_by(id=entity_id)
                     .update(values))
            self.session.commit()
            return count > 0
        except SQLAlchemyError:
            self.session.rollback()
            logger.error('Update failed for %s id=%s', self.model.__name__, entity_id,
                         exc_info=True)
            return False

    def delete_by_id(self, entity_id) -> bool:
        entity = self.select_by_id(entity_id)
        if entity is None:
            return False
        try:
            self.session.delete(entity)
            self.session.commit()
            return True
        except SQLAlchemyError:
            self.session.rollback()
            logger.error('Delete failed for %s id=%s', self.model.__name__, entity_id,
                         exc_info=True)
            return False
