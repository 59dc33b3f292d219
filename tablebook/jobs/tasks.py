"""Background job tasks"""

from typing import Optional

import structlog
from twilio.rest import Client as TwilioClient

from tablebook.jobs.celery_app import celery_app
from tablebook.config import settings

logger = structlog.get_logger()


def _waitlist_message(restaurant_name: str, customer_name: str, date: str, time: str) -> str:
    message = f"Hi {customer_name}, a table has opened up at {restaurant_name} "
    message += f"for {date} at {time}. "
    message += "Reply or call us to confirm your booking."
    return message


@celery_app.task(name="notify_waitlist_customer")
def notify_waitlist_customer(
    entry_id: str,
    restaurant_name: str,
    customer_name: str,
    customer_phone: Optional[str],
    date: str,
    time: str,
):
    """Tell a waitlisted customer that a table is available"""
    logger.info("Notifying waitlist customer", entry_id=entry_id)

    if not customer_phone:
        logger.info("Waitlist entry has no phone number", entry_id=entry_id)
        return {"sent": False}

    if not settings.twilio_account_sid:
        logger.info("SMS delivery not configured, notification logged only", entry_id=entry_id)
        return {"sent": False}

    try:
        client = TwilioClient(settings.twilio_account_sid, settings.twilio_auth_token)
        message = client.messages.create(
            body=_waitlist_message(restaurant_name, customer_name, date, time),
            from_=settings.twilio_phone_number,
            to=customer_phone,
        )
    except Exception as e:
        logger.error(
            "Failed to send waitlist notification",
            entry_id=entry_id,
            error=str(e),
        )
        return {"sent": False}

    logger.info("Sent waitlist notification", entry_id=entry_id, to=customer_phone[-4:])
    return {"sent": True, "message_sid": message.sid}
