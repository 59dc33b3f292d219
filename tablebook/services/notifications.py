"""Waitlist notification dispatch"""

import structlog

from tablebook.core.timeslots import format_minutes
from tablebook.models import Restaurant, WaitlistEntry

logger = structlog.get_logger()


class CeleryWaitlistNotifier:
    """Hands waitlist notifications to the Celery worker without waiting on them"""

    def dispatch(self, entry: WaitlistEntry, restaurant: Restaurant) -> bool:
        """Queue the SMS task; returns False when the broker refused it"""
        from tablebook.jobs.tasks import notify_waitlist_customer

        try:
            notify_waitlist_customer.apply_async(
                kwargs={
                    "entry_id": str(entry.id),
                    "restaurant_name": restaurant.name,
                    "customer_name": entry.customer_name,
                    "customer_phone": entry.customer_phone,
                    "date": entry.date.isoformat(),
                    "time": format_minutes(entry.time),
                },
                retry=False,
            )
        except Exception as e:
            logger.error(
                "Failed to dispatch waitlist notification",
                entry_id=str(entry.id),
                error=str(e),
            )
            return False

        logger.info("Queued waitlist notification", entry_id=str(entry.id))
        return True
