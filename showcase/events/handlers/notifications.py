"""
Inquiry e-mail notification.

Listens to 'inquiry.created' and POSTs the inquiry plus a vehicle summary to
the configured notification endpoint. One attempt, no retry; every failure is
logged and swallowed because the inquiry is already stored.
"""
import logging

import httpx

from showcase.config import get_settings
from showcase.events.bus import event_bus

logger = logging.getLogger(__name__)


async def send_inquiry_notification(payload: dict) -> bool:
    """
    Deliver one notification.

    Returns:
        True on a 2xx answer, False otherwise (including "not configured")
    """
    settings = get_settings()
    if not settings.notification_url:
        logger.debug("Notification endpoint not configured, skipping inquiry e-mail")
        return False

    headers = {"Content-Type": "application/json"}
    if settings.notification_token:
        headers["Authorization"] = f"Bearer {settings.notification_token}"

    stock_number = payload.get("vehicle", {}).get("stock_number")
    try:
        async with httpx.AsyncClient(timeout=settings.notification_timeout) as client:
            response = await client.post(settings.notification_url, json=payload, headers=headers)
    except httpx.TimeoutException:
        logger.error(f"Email notification timed out for stock #{stock_number}")
        return False
    except httpx.HTTPError as e:
        logger.error(f"Email notification failed for stock #{stock_number}: {e}")
        return False

    if 200 <= response.status_code < 300:
        logger.info(f"Email notification sent for stock #{stock_number}")
        return True

    logger.error(
        f"Email notification failed for stock #{stock_number}: "
        f"status {response.status_code}"
    )
    return False


@event_bus.on('inquiry.created')
async def notify_inquiry_created(data: dict):
    """Handler for 'inquiry.created'. Event data is the notification payload."""
    await send_inquiry_notification(data)
