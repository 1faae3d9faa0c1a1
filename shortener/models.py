"""Data models for the short link registry."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional


NEVER = "never"


def isoformat_utc(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with a ``Z`` suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ClickEvent:
    """One successful resolution of a short link."""
    
    timestamp: datetime
    source: str = "direct"
    client_address: Optional[str] = None
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": isoformat_utc(self.timestamp),
            "source": self.source,
            "client_address": self.client_address,
        }


@dataclass
class ShortLink:
    """A short code mapped to its original URL, expiry and click history."""
    
    code: str
    original_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    clicks: List[ClickEvent] = field(default_factory=list)
    
    @property
    def total_clicks(self) -> int:
        return len(self.clicks)
    
    def is_expired(self, now: datetime) -> bool:
        """Check whether the link is dead at ``now``.
        
        A link is live while ``now <= expires_at``; links without an expiry
        never die.
        """
        return self.expires_at is not None and now > self.expires_at
    
    def expiry_label(self) -> str:
        """ISO-8601 expiry, or ``"never"`` for permanent links."""
        if self.expires_at is None:
            return NEVER
        return isoformat_utc(self.expires_at)
    
    def snapshot(self) -> "ShortLink":
        """Copy that shares no mutable state with this link."""
        return replace(self, clicks=list(self.clicks))
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_code": self.code,
            "original_url": self.original_url,
            "created_at": isoformat_utc(self.created_at),
            "expiry": self.expiry_label(),
            "total_clicks": self.total_clicks,
            "detailed_clicks": [click.to_dict() for click in self.clicks],
        }
