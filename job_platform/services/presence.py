"""
Presence Registry - which employer is listening on which channel.

Process-local and advisory only: nothing ties a channel to the employer
that claims it, and the mapping is lost on restart (clients re-register
when they reconnect). Running several API processes needs a shared
registry instead of this one.
"""

from typing import Dict, List, Optional, Set

from job_platform.core.logging import get_logger

logger = get_logger(__name__)


class PresenceRegistry:
    """
    employerId -> channelId, with a reverse index for disconnect cleanup.

    Usage:
        presence = PresenceRegistry()
        presence.register("65f0...", channel_id)
        presence.lookup("65f0...")      # -> channel_id
        presence.unregister(channel_id)
    """

    def __init__(self):
        self._channels: Dict[str, str] = {}
        self._employers: Dict[str, Set[str]] = {}

    def register(self, employer_id: str, channel_id: str) -> None:
        """Bind employer to channel. Last registration wins."""
        previous = self._channels.get(employer_id)
        if previous is not None and previous != channel_id:
            self._drop_reverse(previous, employer_id)

        self._channels[employer_id] = channel_id
        self._employers.setdefault(channel_id, set()).add(employer_id)
        logger.info("Channel %s registered for employer %s", channel_id, employer_id)

    def unregister(self, channel_id: str) -> List[str]:
        """Remove every employer bound to the channel; returns their ids."""
        employer_ids = self._employers.pop(channel_id, set())
        for employer_id in employer_ids:
            if self._channels.get(employer_id) == channel_id:
                del self._channels[employer_id]
                logger.info("Employer %s disconnected", employer_id)
        return sorted(employer_ids)

    def lookup(self, employer_id: str) -> Optional[str]:
        return self._channels.get(employer_id)

    def _drop_reverse(self, channel_id: str, employer_id: str) -> None:
        bound = self._employers.get(channel_id)
        if bound is None:
            return
        bound.discard(employer_id)
        if not bound:
            del self._employers[channel_id]

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, employer_id: str) -> bool:
        return employer_id in self._channels
