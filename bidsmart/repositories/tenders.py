"""Tender candidate persistence."""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import sessionmaker

from bidsmart.core.constants import TENDER_STATUS_NEW
from bidsmart.core.logging import get_logger
from bidsmart.db.models import Tender
from bidsmart.db.session import session_scope
from bidsmart.schemas import ParsedTender

logger = get_logger("repositories.tenders")


class TenderRepository:
    """Insert and triage-state updates over the ``tenders`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add_batch(
        self,
        tenders: Iterable[ParsedTender],
        crawl_config_id: Optional[int] = None,
    ) -> List[Tender]:
        """Insert parsed tenders in one transaction with status ``new``.

        Each ParsedTender's source_url must already be resolved.
        """
        now = datetime.utcnow()
        rows = [
            Tender(
                crawl_config_id=crawl_config_id,
                title=t.title,
                client=t.client,
                industry=t.industry,
                budget=t.budget,
                deadline=t.deadline,
                requirements=t.requirements,
                source_url=t.source_url,
                status=TENDER_STATUS_NEW,
                created_at=now,
            )
            for t in tenders
        ]
        if not rows:
            return []
        with session_scope(self._session_factory) as session:
            session.add_all(rows)
            session.flush()
        logger.info("Inserted %d tenders (config=%s)", len(rows), crawl_config_id)
        return rows

    def get(self, tender_id: int) -> Optional[Tender]:
        with session_scope(self._session_factory) as session:
            return session.get(Tender, tender_id)

    def list(self) -> List[Tender]:
        with session_scope(self._session_factory) as session:
            return session.query(Tender).order_by(Tender.created_at.desc(), Tender.id.desc()).all()

    def list_by_status(self, status: str) -> List[Tender]:
        with session_scope(self._session_factory) as session:
            return (
                session.query(Tender)
                .filter(Tender.status == status)
                .order_by(Tender.created_at.desc(), Tender.id.desc())
                .all()
            )

    def set_status(
        self,
        tender_id: int,
        status: str,
        project_id: Optional[str] = None,
    ) -> Optional[Tender]:
        with session_scope(self._session_factory) as session:
            tender = session.get(Tender, tender_id)
            if tender is None:
                return None
            tender.status = status
            if project_id is not None:
                tender.project_id = project_id
        return tender
