"""
Device token endpoints - register a client for push notifications.
"""

import logging

from fastapi import APIRouter, Depends

from app.models.device import OkResponse, SaveTokenRequest
from app.routes.deps import get_device_registry
from app.services.device_service import DeviceRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Devices"])


@router.post("/save-token", response_model=OkResponse)
def save_token(request: SaveTokenRequest, registry: DeviceRegistry = Depends(get_device_registry)):
    """
    Register an FCM token. Saving a known token again is a no-op.
    """
    registry.register_if_absent(request.token)
    return OkResponse()
