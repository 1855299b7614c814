"""Request and page timing records.

All times are in milliseconds. -1 marks a phase that does not apply.
"""

from __future__ import annotations

from dataclasses import dataclass

NOT_APPLICABLE = -1.0


def _applies(duration: float | None) -> bool:
    return duration is not None and duration != NOT_APPLICABLE


@dataclass
class Timing:
    """Phases of a request/response round trip.

    Attributes:
        blocked: Time spent queued waiting for a connection
        dns: DNS resolution time
        connect: Time to create the TCP connection, ssl included
        send: Time to send the request
        wait: Time waiting for the first response byte
        receive: Time to read the response
        ssl: TLS negotiation time (already part of connect)
        comment: Optional user or application comment
    """

    blocked: float | None = NOT_APPLICABLE
    dns: float | None = NOT_APPLICABLE
    connect: float | None = NOT_APPLICABLE
    send: float = NOT_APPLICABLE
    wait: float = NOT_APPLICABLE
    receive: float = NOT_APPLICABLE
    ssl: float | None = NOT_APPLICABLE
    comment: str | None = None

    @property
    def total(self) -> float:
        """Sum of the phases that apply; ssl is excluded since connect covers it.

        Example:
            >>> Timing(blocked=0, dns=-1, connect=15, send=20, wait=38, receive=12, ssl=-1).total
            85
        """
        phases = (self.blocked, self.dns, self.connect, self.send, self.wait, self.receive)
        return sum(phase for phase in phases if _applies(phase))

    def describe(self) -> str:
        """Multi-line summary of each phase."""
        lines = [
            f"Blocked: {self._ms(self.blocked)}",
            f"DNS: {self._ms(self.dns)}",
            f"SSL/TLS: {self._ms(self.ssl)}",
            f"Connect: {self._ms(self.connect)}",
            f"Send: {self._ms(self.send)}",
            f"Wait: {self._ms(self.wait)}",
            f"Receive: {self._ms(self.receive)}",
        ]
        return "\n".join(lines)

    @staticmethod
    def _ms(duration: float | None) -> str:
        return f"{NOT_APPLICABLE if duration is None else duration:g}ms"


@dataclass
class PageTiming:
    """Page load events, in milliseconds since the page started loading.

    Attributes:
        on_content_load: DOMContentLoaded (or readyState interactive)
        on_load: Load event
        comment: Optional user or application comment
    """

    on_content_load: float | None = NOT_APPLICABLE
    on_load: float | None = NOT_APPLICABLE
    comment: str | None = None
