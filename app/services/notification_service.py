"""
Push Notifier - Firebase Cloud Messaging fan-out for new reports.

DESIGN PRINCIPLES:
- Best-effort: the report is already stored when this runs
- Never raises; failures are logged and returned in the DeliveryResult
- No retries
"""

from firebase_admin import messaging
from app.models.report import ReportResponse
from app.utils.text import or_unknown
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# FCM rejects multicast messages with more tokens than this
MAX_MULTICAST_TOKENS = 500


class DeliveryResult:
    """
    Outcome of one notify() call.
    """

    def __init__(
        self,
        success_count: int = 0,
        failure_count: int = 0,
        skipped: bool = False,
        error: Optional[str] = None
    ):
        self.success_count = success_count
        self.failure_count = failure_count
        self.skipped = skipped
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None and self.failure_count == 0

    def to_dict(self) -> Dict:
        result = {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "skipped": self.skipped,
        }
        if self.error:
            result["error"] = self.error
        return result


def build_title(report: ReportResponse) -> str:
    return f"{or_unknown(report.severity)} Emergency!"


def build_body(report: ReportResponse) -> str:
    return f"{or_unknown(report.patient_name)} - {or_unknown(report.incident)} at {or_unknown(report.location)}"


class Notifier:
    """
    Sends one multicast push per new report to every registered device.
    """

    def __init__(self, firebase_app=None, enabled: bool = True):
        self.firebase_app = firebase_app
        self.enabled = enabled

    def build_message(self, report: ReportResponse, tokens: List[str]) -> messaging.MulticastMessage:
        # FCM data payload values must be strings
        data = {
            "reportId": report.id,
            "severity": report.severity or "",
            "role": report.role or "",
        }
        return messaging.MulticastMessage(
            tokens=tokens,
            notification=messaging.Notification(
                title=build_title(report),
                body=build_body(report),
            ),
            data=data,
        )

    def notify(self, report: ReportResponse, tokens: List[str]) -> DeliveryResult:
        """
        Push a notification about `report` to every token.

        Returns:
            DeliveryResult with FCM's success/failure counts. An empty token
            list or a disabled notifier short-circuits to a skipped result.
        """
        if not self.enabled:
            logger.info(f"Push disabled, skipping notification for report {report.id}")
            return DeliveryResult(skipped=True)

        if not tokens:
            logger.info(f"No device tokens registered, skipping notification for report {report.id}")
            return DeliveryResult(skipped=True)

        result = DeliveryResult()
        try:
            for start in range(0, len(tokens), MAX_MULTICAST_TOKENS):
                batch = tokens[start:start + MAX_MULTICAST_TOKENS]
                response = messaging.send_each_for_multicast(
                    self.build_message(report, batch),
                    app=self.firebase_app,
                )
                result.success_count += response.success_count
                result.failure_count += response.failure_count
        except Exception as e:
            logger.error(f"⚠️ Push notification failed for report {report.id}: {e}", exc_info=True)
            return DeliveryResult(
                success_count=result.success_count,
                failure_count=len(tokens) - result.success_count,
                error=str(e),
            )

        if result.failure_count:
            logger.warning(
                f"Push for report {report.id}: {result.success_count} sent, "
                f"{result.failure_count} failed"
            )
        else:
            logger.info(f"✅ Push for report {report.id} sent to {result.success_count} device(s)")
        return result
