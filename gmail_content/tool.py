"""Thin helpers that run the parsers and builder against a Gmail API service.

The service is any authenticated `googleapiclient.discovery.build("gmail", "v1", ...)`
client; building it (OAuth, token storage) is left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence, Tuple

from googleapiclient.errors import HttpError

from .decoder import b64url_decode
from .parser import message_to_detail
from .types import DEFAULT_FILENAME, DEFAULT_MIME_TYPE, MessageDetail, MessagePart, OutboundMessage
from .walker import find_attachment_part

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "me"
MAX_BATCH_SIZE = 25


def fetch_message_json(
    gmail_service,
    message_id: str,
    *,
    format: str = "full",
    user_id: str = DEFAULT_USER_ID,
) -> Dict[str, Any]:
    """
    Download a single Gmail message as a JSON dict.
    """
    return (
        gmail_service.users()
        .messages()
        .get(userId=user_id, id=message_id, format=format)
        .execute()
    )


def read_message_detail(gmail_service, message_id: str, *, user_id: str = DEFAULT_USER_ID) -> MessageDetail:
    """
    Fetch a message and parse it into headers, body text and attachment metadata.
    """
    logger.info("Reading message %s", message_id)
    return message_to_detail(fetch_message_json(gmail_service, message_id, user_id=user_id))


def read_message_details(
    gmail_service,
    message_ids: Sequence[str],
    *,
    user_id: str = DEFAULT_USER_ID,
) -> List[MessageDetail]:
    """
    Fetch and parse up to MAX_BATCH_SIZE messages. Messages the API refuses
    are skipped so one bad id does not fail the whole batch.
    """
    if len(message_ids) > MAX_BATCH_SIZE:
        raise ValueError(
            f"maximum {MAX_BATCH_SIZE} messages per batch request, got {len(message_ids)}"
        )
    details: List[MessageDetail] = []
    for mid in message_ids:
        try:
            details.append(read_message_detail(gmail_service, mid, user_id=user_id))
        except HttpError as e:
            logger.warning("Skipping message %s: %s", mid, e)
    logger.info("Retrieved %d of %d messages", len(details), len(message_ids))
    return details


def fetch_attachment_bytes(
    gmail_service,
    message_id: str,
    attachment_id: str,
    *,
    user_id: str = DEFAULT_USER_ID,
) -> bytes:
    """
    Download attachment bytes for a part that only carried body.attachmentId.
    """
    resp = gmail_service.users().messages().attachments().get(
        userId=user_id, messageId=message_id, id=attachment_id
    ).execute()
    return b64url_decode(resp.get("data", ""))


def resolve_attachment_meta(
    gmail_service,
    message_id: str,
    attachment_id: str,
    *,
    user_id: str = DEFAULT_USER_ID,
) -> Tuple[str, str]:
    """
    Look up (mime_type, filename) for an attachment id by re-reading its message.
    Falls back to generic defaults instead of failing: the metadata is only for display.
    """
    try:
        msg = (
            gmail_service.users()
            .messages()
            .get(userId=user_id, id=message_id, format="full", fields="payload")
            .execute()
        )
    except HttpError as e:
        logger.warning("Could not fetch message %s for attachment metadata: %s", message_id, e)
        return DEFAULT_MIME_TYPE, DEFAULT_FILENAME

    payload = msg.get("payload")
    info = find_attachment_part(MessagePart.from_api(payload), attachment_id) if payload else None
    if info is None:
        logger.warning("Attachment %s not found in message %s", attachment_id, message_id)
        return DEFAULT_MIME_TYPE, DEFAULT_FILENAME
    return info.mime_type or DEFAULT_MIME_TYPE, info.filename or DEFAULT_FILENAME


def _request_body(outbound: OutboundMessage) -> Dict[str, Any]:
    body: Dict[str, Any] = {"raw": outbound.to_raw()}
    if outbound.thread_id:
        body["threadId"] = outbound.thread_id
    return body


def send_message(gmail_service, outbound: OutboundMessage, *, user_id: str = DEFAULT_USER_ID) -> Dict[str, Any]:
    """
    Send a plain-text message, threaded when `outbound.thread_id` is set.
    Returns the API response ({"id", "threadId", ...}).
    """
    sent = gmail_service.users().messages().send(userId=user_id, body=_request_body(outbound)).execute()
    logger.info("Sent message %s (thread %s)", sent.get("id"), sent.get("threadId"))
    return sent


def create_draft(gmail_service, outbound: OutboundMessage, *, user_id: str = DEFAULT_USER_ID) -> Dict[str, Any]:
    """
    Save a plain-text message as a draft.
    """
    draft = (
        gmail_service.users()
        .drafts()
        .create(userId=user_id, body={"message": _request_body(outbound)})
        .execute()
    )
    logger.info("Created draft %s", draft.get("id"))
    return draft


__all__ = [
    "DEFAULT_USER_ID",
    "MAX_BATCH_SIZE",
    "create_draft",
    "fetch_attachment_bytes",
    "fetch_message_json",
    "read_message_detail",
    "read_message_details",
    "resolve_attachment_meta",
    "send_message",
]
