"""Pure event domain model - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import Enum


class RepeatType(Enum):
    """How an event repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class RepeatRule:
    """Fixed-interval repeat rule."""

    type: RepeatType = RepeatType.NONE
    interval: int = 1
    end_date: date | None = None

    def __post_init__(self):
        if self.interval < 1:
            raise ValueError(f"Repeat interval must be >= 1, got {self.interval}")
        if self.type is RepeatType.NONE and self.end_date is not None:
            # A non-repeating rule has no effective end date
            object.__setattr__(self, "end_date", None)

    @property
    def repeats(self) -> bool:
        return self.type is not RepeatType.NONE

    @classmethod
    def from_dict(cls, data: dict | None) -> "RepeatRule":
        """Create RepeatRule from the wire format."""
        if not data:
            return cls()
        try:
            repeat_type = RepeatType(data.get("type", "none") or "none")
        except ValueError:
            repeat_type = RepeatType.NONE
        interval = int(data.get("interval") or 1)
        end_date = None
        if repeat_type is not RepeatType.NONE and data.get("endDate"):
            try:
                end_date = date.fromisoformat(str(data["endDate"])[:10])
            except ValueError:
                end_date = None
        return cls(type=repeat_type, interval=max(interval, 1), end_date=end_date)

    def to_dict(self) -> dict:
        data: dict = {"type": self.type.value, "interval": self.interval}
        if self.end_date:
            data["endDate"] = self.end_date.isoformat()
        return data


@dataclass(frozen=True)
class TimeInterval:
    """A concrete time span built from a date and two wall times."""

    start: datetime
    end: datetime

    def overlaps(self, other: "TimeInterval") -> bool:
        """Half-open overlap: touching boundaries do not overlap."""
        return self.start < other.end and other.start < self.end


def parse_wall_time(value: str) -> time:
    """Parse an HH:MM wall-clock time."""
    hour, _, minute = value.partition(":")
    return time(int(hour), int(minute[:2] or 0))


@dataclass(frozen=True)
class EventTemplate:
    """An unsaved event, as submitted by the user."""

    title: str
    date: date
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatRule = field(default_factory=RepeatRule)
    notification_time: int = 0
    # Opaque correlation key shared by occurrences of one repeat definition
    series_id: str | None = None

    def interval(self) -> TimeInterval:
        """Time span of this event on its own date."""
        return TimeInterval(
            start=datetime.combine(self.date, parse_wall_time(self.start_time)),
            end=datetime.combine(self.date, parse_wall_time(self.end_time)),
        )

    def on(self, new_date: date) -> "EventTemplate":
        """Copy of this event moved to another date."""
        return replace(self, date=new_date)

    @classmethod
    def from_dict(cls, data: dict) -> "EventTemplate":
        """Create EventTemplate from the wire format."""
        return cls(**_fields_from_dict(data))

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "description": self.description,
            "location": self.location,
            "category": self.category,
            "repeat": self.repeat.to_dict(),
            "notificationTime": self.notification_time,
        }
        if self.series_id:
            data["seriesId"] = self.series_id
        return data


@dataclass(frozen=True)
class Event(EventTemplate):
    """A stored event. The id is assigned by the storage layer."""

    id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(id=str(data["id"]), **_fields_from_dict(data))

    @classmethod
    def from_template(cls, template: EventTemplate, event_id: str) -> "Event":
        """Attach a storage-assigned id to a template."""
        return cls(
            id=event_id,
            title=template.title,
            date=template.date,
            start_time=template.start_time,
            end_time=template.end_time,
            description=template.description,
            location=template.location,
            category=template.category,
            repeat=template.repeat,
            notification_time=template.notification_time,
            series_id=template.series_id,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, **super().to_dict()}


def event_id(event: EventTemplate) -> str | None:
    """Id of a stored event, or None for an unsaved template."""
    return getattr(event, "id", None) or None


def _fields_from_dict(data: dict) -> dict:
    return {
        "title": data.get("title", ""),
        "date": date.fromisoformat(str(data["date"])[:10]),
        "start_time": data.get("startTime") or "",
        "end_time": data.get("endTime") or "",
        "description": data.get("description") or "",
        "location": data.get("location") or "",
        "category": data.get("category") or "",
        "repeat": RepeatRule.from_dict(data.get("repeat")),
        "notification_time": int(data.get("notificationTime") or 0),
        "series_id": data.get("seriesId"),
    }
