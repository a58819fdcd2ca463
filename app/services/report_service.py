"""
Report service - Firestore CRUD for emergency reports.

DESIGN NOTE:
- Reports live in a single Firestore collection
- created_at/updated_at come from the Firestore server clock
- created_at is the only ordering key for listings (newest first)
- The only mutation is flipping `seen` to true; nothing is ever deleted
"""

from firebase_admin import firestore
from google.api_core.exceptions import NotFound
from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.models.report import ReportCreate, ReportResponse
from app.utils.dates import as_local, month_range
from app.utils.firestore_helpers import where_filter
from datetime import datetime
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


def resolve_month_range(month: Optional[int], year: Optional[int]) -> Tuple[datetime, datetime]:
    """
    Validate a month/year pair and return its local-time range.

    Raises:
        ValidationError: either value missing, or not a real month
    """
    if month is None or year is None:
        raise ValidationError("Month and year are required")
    try:
        return month_range(month, year)
    except ValueError as e:
        raise ValidationError(f"Invalid month/year: {month}/{year}") from e


class ReportStore:
    """
    Report persistence on top of a Firestore client.

    The client is injected so the same store runs against real Firestore,
    the emulator, or an in-memory double in tests.
    """

    def __init__(self, db, collection: str = "reports"):
        self.db = db
        self.collection = collection

    def _collection(self):
        return self.db.collection(self.collection)

    def create(self, report_data: ReportCreate) -> ReportResponse:
        """
        Store a new report with seen=False and server-side timestamps.

        Returns:
            ReportResponse: the stored report, re-read so timestamps are resolved

        Raises:
            StorageError: Firestore write or read-back failed
        """
        doc_ref = self._collection().document()  # Auto-generate unique ID
        report_dict = report_data.to_document()
        report_dict.update({
            "seen": False,
            "created_at": firestore.SERVER_TIMESTAMP,
            "updated_at": firestore.SERVER_TIMESTAMP,
        })

        try:
            doc_ref.set(report_dict)
            created_doc = doc_ref.get()
        except Exception as e:
            logger.error(f"Failed to save report to Firestore: {e}", exc_info=True)
            raise StorageError("Failed to process report") from e

        logger.info(f"Report saved to Firestore: {doc_ref.id}")
        return ReportResponse.from_snapshot(created_doc)

    def list_reports(
        self,
        since: Optional[datetime] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[ReportResponse]:
        """
        Retrieve reports sorted by created_at descending (newest first).

        Only one filter mode applies per call:
        - nothing: every report
        - since: created_at strictly after the given instant
        - month + year: created_at within that calendar month, local time

        Raises:
            ValidationError: both modes given, or an incomplete/invalid month
            StorageError: Firestore query failed
        """
        month_requested = month is not None or year is not None
        if since is not None and month_requested:
            raise ValidationError("Use either 'since' or 'month'/'year', not both")

        query = self._collection()
        if since is not None:
            query = where_filter(query, "created_at", ">", as_local(since))
        elif month_requested:
            start, end = resolve_month_range(month, year)
            query = where_filter(query, "created_at", ">=", start)
            query = where_filter(query, "created_at", "<", end)

        query = query.order_by("created_at", direction=firestore.Query.DESCENDING)

        try:
            docs = list(query.stream())
        except Exception as e:
            logger.error(f"Failed to load reports from Firestore: {e}", exc_info=True)
            raise StorageError("Failed to load reports") from e

        return [ReportResponse.from_snapshot(doc) for doc in docs]

    def get(self, report_id: str) -> Optional[ReportResponse]:
        """
        Retrieve a single report by ID, or None if it does not exist.
        """
        try:
            doc = self._collection().document(report_id).get()
        except Exception as e:
            logger.error(f"Failed to read report {report_id}: {e}", exc_info=True)
            raise StorageError("Failed to load report") from e

        if not doc.exists:
            return None
        return ReportResponse.from_snapshot(doc)

    def mark_seen(self, report_id: str) -> ReportResponse:
        """
        Flag a report as acknowledged by the dashboard.

        Idempotent: marking an already-seen report again leaves seen=True.
        An unknown ID never creates a document.

        Raises:
            NotFoundError: no report with this ID
            StorageError: Firestore update failed
        """
        doc_ref = self._collection().document(report_id)

        try:
            if not doc_ref.get().exists:
                raise NotFoundError(f"Report {report_id} not found")
            doc_ref.update({
                "seen": True,
                "updated_at": firestore.SERVER_TIMESTAMP,
            })
            updated_doc = doc_ref.get()
        except NotFoundError:
            raise
        except NotFound as e:
            # Document vanished between the existence check and the update
            raise NotFoundError(f"Report {report_id} not found") from e
        except Exception as e:
            logger.error(f"Failed to mark report {report_id} as seen: {e}", exc_info=True)
            raise StorageError("Failed to update report") from e

        logger.info(f"✅ Report {report_id} marked as seen")
        return ReportResponse.from_snapshot(updated_doc)
