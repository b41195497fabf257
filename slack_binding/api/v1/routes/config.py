"""Manual configuration management endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Depends

from slack_binding.adapters.integration import API_KEY, CHANNEL
from slack_binding.api.v1.dependencies import get_config_store
from slack_binding.models.schemas import ConfigValueUpdate, ConfigValueResponse

router = APIRouter(prefix="/api/config", tags=["config"])
logger = structlog.get_logger()

CONFIG_KEYS = [API_KEY, CHANNEL]
SECRET_KEYS = [API_KEY]


def _mask(value: str) -> str:
    """Keep the last 4 characters of a secret"""
    if len(value) <= 4:
        return "****"
    return "****" + value[-4:]


def _to_response(key: str, value) -> ConfigValueResponse:
    if value and key in SECRET_KEYS:
        value = _mask(value)
    return ConfigValueResponse(key=key, value=value, configured=bool(value))


@router.get("/{key}", response_model=ConfigValueResponse)
async def get_config_value(key: str, store = Depends(get_config_store)):
    """Read a value from the local configuration store"""
    if key not in CONFIG_KEYS:
        raise HTTPException(status_code=404, detail=f"Unknown configuration key: {key}")

    return _to_response(key, store.get(key))


@router.put("/{key}", response_model=ConfigValueResponse)
def set_config_value(
    key: str,
    update: ConfigValueUpdate,
    store = Depends(get_config_store),
):
    """Write a value to the local configuration store (persisted when storage is enabled)"""
    if key not in CONFIG_KEYS:
        raise HTTPException(status_code=404, detail=f"Unknown configuration key: {key}")

    store.set(key, update.value)
    logger.info("config_updated_via_api", key=key)

    return _to_response(key, store.get(key))
