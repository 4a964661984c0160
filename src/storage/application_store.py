"""
Storage layer for benefit applications.

Handles:
- Grouped application counts per benefit
- Recording applications (seeding, tests)
"""

import logging

from src.core.domain_models import ApplicationStats
from src.core.errors import UpstreamFetchFailure
from .db import Database


logger = logging.getLogger(__name__)


class ApplicationStore:
    """
    Read access to applications submitted against benefits.

    Usage:
        store = ApplicationStore("applications.db")
        stats = store.count_by_status("42")
    """

    def __init__(self, db_url: str = "applications.db"):
        """
        Initialize application store.

        Args:
            db_url: SQLite path or PostgreSQL URL
        """
        self.db = Database(db_url)

    def count_by_status(self, benefit_id) -> ApplicationStats:
        """
        Count applications for one benefit, grouped by status.

        Statuses outside pending/approved/rejected still count toward the total.

        Args:
            benefit_id: Benefit id (compared as a string)

        Returns:
            ApplicationStats (all zeros if the benefit has no applications)

        Raises:
            UpstreamFetchFailure: If the store cannot be queried
        """
        p = self.db.placeholder
        try:
            with self.db.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    SELECT status, COUNT(*)
                    FROM applications
                    WHERE "benefitId" = {p}
                    GROUP BY status
                    """,
                    (str(benefit_id),)
                )
                counts = {row[0]: row[1] for row in cursor.fetchall()}
        except Exception as e:
            logger.error(f"Failed to count applications for benefit {benefit_id}: {e}")
            raise UpstreamFetchFailure("Application store query failed") from e

        return ApplicationStats(
            applications_count=sum(counts.values()),
            pending_applications_count=counts.get("pending", 0),
            approved_applications_count=counts.get("approved", 0),
            rejected_applications_count=counts.get("rejected", 0),
        )

    def add_application(self, benefit_id, status: str = "pending") -> None:
        """
        Record an application against a benefit.

        Args:
            benefit_id: Benefit id
            status: Application status
        """
        p = self.db.placeholder
        with self.db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f'INSERT INTO applications ("benefitId", status) VALUES ({p}, {p})',
                (str(benefit_id), status)
            )

        logger.debug(f"Recorded {status} application for benefit {benefit_id}")
