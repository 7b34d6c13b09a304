"""Chat notifications."""

from .webex import format_announcement, send_release_notes

__all__ = ["format_announcement", "send_release_notes"]
