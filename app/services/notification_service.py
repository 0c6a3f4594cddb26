"""
Best-effort notification dispatch.

Notifications (welcome, payment confirmation, client activity) are detached
from the request that triggers them: they run as FastAPI background tasks
after the response is sent, and a failed send is logged, never raised.
"""

import logging
from typing import Awaitable, Callable

from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)


async def send_best_effort(
    notification_type: str, send_func: Callable[..., Awaitable[dict]], **kwargs
) -> bool:
    """Await a send function, logging instead of raising on failure"""
    recipient = kwargs.get("to", "unknown recipient")
    try:
        logger.info(f"📧 Sending {notification_type} email to {recipient}")
        await send_func(**kwargs)
    except Exception as e:
        logger.error(f"❌ Failed to send {notification_type} email to {recipient}: {e}")
        return False
    logger.info(f"✅ {notification_type} email sent successfully to {recipient}")
    return True


def dispatch_notification(
    background_tasks: BackgroundTasks,
    notification_type: str,
    send_func: Callable[..., Awaitable[dict]],
    **kwargs,
) -> None:
    """Queue a notification to run after the response; the caller never waits on it"""
    if not kwargs.get("to"):
        logger.debug(f"⚠️ No recipient for {notification_type} notification, skipping")
        return
    background_tasks.add_task(send_best_effort, notification_type, send_func, **kwargs)
