"""Shared-secret authentication for the tool endpoints."""

import hmac
import logging
from typing import Annotated

from fastapi import Header, status

from airtable_mcp.api.deps import AppSettings
from airtable_mcp.exceptions import GatewayError

logger = logging.getLogger(__name__)


async def require_actions_key(
    settings: AppSettings,
    x_actions_key: Annotated[str | None, Header()] = None,
) -> None:
    """Validate the x-actions-key header against the configured secret.

    Args:
        settings: The application settings
        x_actions_key: The key from the X-Actions-Key header

    Raises:
        GatewayError: 500 if the server has no key configured,
            401 if the header is missing or does not match
    """
    if not settings.actions_key:
        logger.error("Tool request rejected: ACTIONS_KEY is not configured")
        raise GatewayError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Server missing ACTIONS_KEY"
        )

    if not x_actions_key or not hmac.compare_digest(
        x_actions_key.encode(), settings.actions_key.encode()
    ):
        if x_actions_key:
            logger.warning(f"Invalid actions key attempted: {x_actions_key[:4]}...")
        else:
            logger.warning("Tool request without actions key")
        raise GatewayError(status.HTTP_401_UNAUTHORIZED, "unauthorized")
