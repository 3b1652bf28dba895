import logging
from email.message import EmailMessage

import aiosmtplib

from .. import config
from ..schemas import LectureOut
from ..utils.ics_utils import build_lecture_ics

logger = logging.getLogger(__name__)

INVITE_FILENAME = "lecture_invite.ics"


def smtp_configured() -> bool:
    return bool(config.SMTP_HOST and config.EMAIL_FROM)


def build_invite_message(to_email: str, lecture: LectureOut) -> EmailMessage:
    """
    Invite mail for one lecture: a plain-text link to the watch page plus
    the lecture as a one-hour calendar event.
    """
    watch_url = f"{config.PUBLIC_BASE_URL}/lectures/{lecture.id}"
    msg = EmailMessage()
    msg["From"] = config.EMAIL_FROM
    msg["To"] = to_email
    msg["Subject"] = f"You're invited: {lecture.title}"
    msg.set_content(f"You signed up for {lecture.title}. Watch it here: {watch_url}")
    ics = build_lecture_ics(
        lecture.id, lecture.title, lecture.description or "", watch_url, lecture.scheduled_time
    )
    msg.add_attachment(
        ics.encode("utf-8"),
        maintype="text",
        subtype="calendar",
        filename=INVITE_FILENAME,
        params={"method": "REQUEST", "charset": "UTF-8"}
    )
    return msg


async def send_lecture_invite(to_email: str, lecture: LectureOut) -> bool:
    """
    Email a calendar invite for ``lecture``. Returns False when nothing was sent.
    """
    if not smtp_configured():
        logger.debug("SMTP not configured, skipping invite for lecture %s", lecture.id)
        return False

    try:
        await aiosmtplib.send(
            build_invite_message(to_email, lecture),
            hostname=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASS,
            start_tls=True
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.warning("Could not send invite for lecture %s to %s: %s", lecture.id, to_email, e)
        return False
    logger.info("Sent invite for lecture %s to %s", lecture.id, to_email)
    return True
