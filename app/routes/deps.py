"""
FastAPI dependency providers.
Routes never reach for globals; they receive components from app.state.
"""

from fastapi import Depends, Request

from app.config.resources import AppResources
from app.core.exceptions import StorageError
from app.services.alert_dispatcher import AlertDispatcher
from app.services.device_service import DeviceRegistry
from app.services.export_service import ReportExporter
from app.services.report_service import ReportStore


def get_resources(request: Request) -> AppResources:
    resources = getattr(request.app.state, "resources", None)
    if resources is None:
        raise StorageError("Database not initialized")
    return resources


def get_report_store(resources: AppResources = Depends(get_resources)) -> ReportStore:
    return resources.report_store


def get_device_registry(resources: AppResources = Depends(get_resources)) -> DeviceRegistry:
    return resources.device_registry


def get_exporter(resources: AppResources = Depends(get_resources)) -> ReportExporter:
    return resources.exporter


def get_dispatcher(resources: AppResources = Depends(get_resources)) -> AlertDispatcher:
    return resources.dispatcher
