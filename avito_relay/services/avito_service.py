from __future__ import annotations

import datetime as dt

import httpx

from avito_relay.services.credential_resolver import Credentials


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def iso_timestamp(moment: dt.datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment or utc_now()
    return moment.astimezone(dt.timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


async def send_avito_message(
    *,
    credentials: Credentials,
    chat_id: str,
    message: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """POST the message to the Avito API. The caller inspects the status."""
    url = f"{credentials.api_url}/messages/send"
    headers = {
        "Authorization": f"Bearer {credentials.api_key}",
        "Content-Type": "application/json",
    }
    payload = {
        "chat_id": chat_id,
        "message": message,
        # Captured at send time, not at request arrival.
        "timestamp": iso_timestamp(),
    }

    async with httpx.AsyncClient(
        timeout=timeout, transport=transport, follow_redirects=True
    ) as client:
        return await client.post(url, headers=headers, json=payload)
