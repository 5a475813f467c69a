"""
Accès tabulaire générique à une table de contenu.

Chaque façade (publique ou admin) passe par ce petit dépôt plutôt que de
manipuler directement la session : sélection filtrée/ordonnée, insertion,
mise à jour partielle, suppression et comptage. Les violations de contraintes
deviennent des ConflictError, les autres échecs SQL des RequestFailure.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError, RequestFailure

logger = logging.getLogger(__name__)


class ContentRepository:
    def __init__(self, db: Session, model, label: str | None = None):
        self.db = db
        self.model = model
        self.label = label or model.__tablename__

    def _query(self, filters: dict[str, Any] | None = None):
        query = self.db.query(self.model)
        for field, value in (filters or {}).items():
            query = query.filter(getattr(self.model, field) == value)
        return query

    def _ordering(self, order: Iterable[str] | None):
        clauses = []
        for key in order or ():
            descending = key.startswith("-")
            column = getattr(self.model, key.lstrip("-"))
            clauses.append(column.desc() if descending else column.asc())
        return clauses

    def select(
        self,
        filters: dict[str, Any] | None = None,
        order: Iterable[str] | None = ("order_index", "created_at"),
        limit: int | None = None,
    ) -> list:
        query = self._query(filters).order_by(*self._ordering(order))
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def first(self, filters: dict[str, Any] | None = None, order: Iterable[str] | None = ("created_at",)):
        return self._query(filters).order_by(*self._ordering(order)).first()

    def get(self, row_id: str):
        row = self.db.get(self.model, row_id)
        if row is None:
            raise NotFoundError(f"{self.label} {row_id} introuvable")
        return row

    def count(self, filters: dict[str, Any] | None = None) -> int:
        return self._query(filters).count()

    def insert(self, values: dict[str, Any], commit: bool = True):
        row = self.model(**values)
        self.db.add(row)
        if commit:
            self.commit()
            self.db.refresh(row)
        return row

    def update(self, row_id: str, values: dict[str, Any], commit: bool = True):
        row = self.get(row_id)
        columns = self.model.__table__.c
        for key, value in values.items():
            # None sur une colonne obligatoire = champ laissé tel quel
            if value is None and key in columns and not columns[key].nullable:
                continue
            setattr(row, key, value)
        if commit:
            self.commit()
            self.db.refresh(row)
        return row

    def delete(self, row_id: str) -> None:
        row = self.get(row_id)
        self.db.delete(row)
        self.commit()

    def commit(self) -> None:
        with atomic(self.db, self.label):
            pass


@contextmanager
def atomic(db: Session, label: str):
    """
    Regroupe les écritures du bloc dans une seule transaction.

    Tout échec annule l'ensemble : aucune écriture partielle ne reste en base.
    """
    try:
        yield
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Contrainte violée sur {label}: {e.orig}")
        raise ConflictError(f"Conflit d'intégrité sur {label}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erreur base de données sur {label}: {str(e)}", exc_info=True)
        raise RequestFailure(f"Erreur base de données sur {label}") from e
    except Exception:
        db.rollback()
        raise
