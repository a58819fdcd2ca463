"""
Process-scoped resources shared by every request.

Built once at startup (or injected by tests), attached to app.state and
handed to routes through the providers in app.routes.deps.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from app.config.firebase import (
    check_firestore,
    get_firestore_client,
    initialize_firebase,
    shutdown_firebase,
)
from app.core.settings import Settings
from app.services.alert_dispatcher import AlertDispatcher
from app.services.device_service import DeviceRegistry
from app.services.export_service import ReportExporter
from app.services.mail_service import Mailer
from app.services.notification_service import Notifier
from app.services.report_service import ReportStore

logger = logging.getLogger(__name__)


@dataclass
class AppResources:
    db: Any
    report_store: ReportStore
    device_registry: DeviceRegistry
    notifier: Notifier
    mailer: Mailer
    exporter: ReportExporter
    dispatcher: AlertDispatcher
    firebase_app: Optional[Any] = None

    @classmethod
    def build(
        cls,
        db,
        settings: Settings,
        firebase_app=None,
        notifier: Optional[Notifier] = None,
        mailer: Optional[Mailer] = None,
    ) -> "AppResources":
        """Wire every component around one Firestore client."""
        report_store = ReportStore(db, collection=settings.REPORTS_COLLECTION)
        device_registry = DeviceRegistry(db, collection=settings.DEVICE_TOKENS_COLLECTION)
        notifier = notifier or Notifier(firebase_app=firebase_app, enabled=settings.PUSH_ENABLED)
        mailer = mailer or Mailer.from_settings(settings)
        return cls(
            db=db,
            report_store=report_store,
            device_registry=device_registry,
            notifier=notifier,
            mailer=mailer,
            exporter=ReportExporter(report_store, escape_all_fields=settings.CSV_ESCAPE_ALL_FIELDS),
            dispatcher=AlertDispatcher(device_registry, notifier, mailer),
            firebase_app=firebase_app,
        )

    def health_check(self) -> int:
        """Number of root collections; raises if Firestore is unreachable."""
        return check_firestore(self.db)

    def close(self) -> None:
        shutdown_firebase(self.firebase_app)
        self.firebase_app = None


def create_resources(settings: Settings) -> AppResources:
    firebase_app = initialize_firebase(settings)
    db = get_firestore_client(firebase_app)
    logger.info("[FIRESTORE] Client ready")
    return AppResources.build(db, settings, firebase_app=firebase_app)
