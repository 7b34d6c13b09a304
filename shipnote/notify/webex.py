"""Release announcements in a Webex room."""

import logging
from typing import Any, Dict

import requests

from ..errors import NotificationError


WEBEX_MESSAGES_URL = "https://webexapis.com/v1/messages"
REQUEST_TIMEOUT = 30


def format_announcement(package_name: str, release_notes: str) -> str:
    """Put the release notes under a package-name heading."""
    return f"## {package_name}\n {release_notes}"


def send_release_notes(token: str, room_id: str, package_name: str,
                       release_notes: str) -> Dict[str, Any]:
    """Post the release notes to a Webex room.

    Args:
        token: Webex access token
        room_id: Target room ID
        package_name: Heading shown above the notes
        release_notes: Rendered markdown notes

    Returns:
        The created message as returned by the API

    Raises:
        NotificationError: If the request fails or is rejected
    """
    logger = logging.getLogger(__name__)

    try:
        response = requests.post(
            WEBEX_MESSAGES_URL,
            headers={'Authorization': f"Bearer {token}"},
            json={
                'roomId': room_id,
                'markdown': format_announcement(package_name, release_notes),
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise NotificationError(f"Error posting release notes to Webex: {e}") from e

    logger.info(f"Posted release notes for {package_name} to room {room_id}")
    return response.json()
