"""
Alert fan-out for newly created reports.

Runs after the report write has committed, as a background task of the
submitting request. Push and mail are independent: one channel failing
(or the device-token lookup failing) never stops the other, and nothing
here can change the HTTP response already sent.
"""

import asyncio
import logging
from typing import Dict, Optional

from app.core.exceptions import DeliveryError
from app.models.report import ReportResponse
from app.services.device_service import DeviceRegistry
from app.services.mail_service import Mailer
from app.services.notification_service import DeliveryResult, Notifier

logger = logging.getLogger(__name__)


class AlertDispatcher:

    def __init__(self, device_registry: DeviceRegistry, notifier: Notifier, mailer: Mailer):
        self.device_registry = device_registry
        self.notifier = notifier
        self.mailer = mailer

    def _push(self, report: ReportResponse) -> DeliveryResult:
        try:
            tokens = self.device_registry.all_tokens()
        except Exception as e:
            raise DeliveryError(f"Could not load device tokens: {e}") from e
        return self.notifier.notify(report, tokens)

    async def dispatch(self, report: ReportResponse) -> Dict[str, Optional[object]]:
        """
        Send push and mail alerts for `report` concurrently.

        Blocking SDK calls run in the default thread-pool executor.

        Returns:
            {"push": DeliveryResult | None, "mail": bool | None}; None marks a
            channel that raised, which has already been logged.
        """
        loop = asyncio.get_running_loop()
        push_result, mail_result = await asyncio.gather(
            loop.run_in_executor(None, self._push, report),
            loop.run_in_executor(None, self.mailer.send_alert, report),
            return_exceptions=True,
        )

        outcome = {"push": push_result, "mail": mail_result}
        for channel, result in outcome.items():
            if isinstance(result, BaseException):
                logger.error(
                    f"⚠️ {channel} alert for report {report.id} failed: {result}",
                    exc_info=result,
                )
                outcome[channel] = None
        return outcome
