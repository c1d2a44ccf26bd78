"""Data models for the conference schedule snapshot."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _without_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Conference:
    """Top-level conference metadata."""
    acronym: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    days: List[str] = field(default_factory=list)
    day_change: Optional[str] = None
    timeslot_duration: Optional[str] = None
    time_zone_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _without_none({
            'acronym': self.acronym,
            'title': self.title,
            'subtitle': self.subtitle,
            'venue': self.venue,
            'city': self.city,
            'start': self.start,
            'end': self.end,
            'days': list(self.days),
            'day_change': self.day_change,
            'timeslot_duration': self.timeslot_duration,
            'time_zone_name': self.time_zone_name
        })


@dataclass
class Link:
    """Link attached to an event."""
    href: str
    title: str
    type: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'href': self.href, 'title': self.title, 'type': self.type}


@dataclass
class Attachment:
    """File attached to an event (slides, papers)."""
    type: Optional[str]
    href: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'href': self.href, 'title': self.title}


@dataclass
class Stream:
    """Live stream of the room an event takes place in."""
    href: str
    title: str = 'Stream'
    type: str = 'application/vnd.apple.mpegurl'

    def to_dict(self) -> Dict[str, Any]:
        return {'href': self.href, 'title': self.title, 'type': self.type}


@dataclass
class Event:
    """Classified and enriched conference event."""
    id: Optional[str]
    day: int
    is_live: bool
    status: str
    type: str
    track: str
    track_key: str
    title: str
    room: str
    start_time: Optional[str] = None
    duration: Optional[str] = None
    persons: List[str] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    streams: List[Stream] = field(default_factory=list)
    chat: Optional[str] = None
    url: Optional[str] = None
    language: Optional[str] = None
    feedback_url: Optional[str] = None
    subtitle: Optional[str] = None
    abstract: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        item = {
            'day': self.day,
            'isLive': self.is_live,
            'status': self.status,
            'type': self.type,
            'track': self.track,
            'trackKey': self.track_key,
            'title': self.title,
            'persons': list(self.persons),
            'links': [link.to_dict() for link in self.links],
            'attachments': [attachment.to_dict() for attachment in self.attachments],
            'streams': [stream.to_dict() for stream in self.streams],
            'chat': self.chat,
            'room': self.room,
            'id': self.id,
            'startTime': self.start_time,
            'duration': self.duration
        }

        # Add optional fields if present
        optional = {
            'url': self.url,
            'language': self.language,
            'feedbackUrl': self.feedback_url,
            'subtitle': self.subtitle,
            'abstract': self.abstract,
            'description': self.description
        }
        item.update(_without_none(optional))

        return item


@dataclass
class SessionType:
    """Entry of the session type taxonomy with running counters."""
    id: str
    name: str
    track_count: int = 0
    event_count: int = 0
    room_count: int = 0
    building_count: int = 0
    rooms: set = field(default_factory=set, repr=False)
    buildings: set = field(default_factory=set, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'trackCount': self.track_count,
            'eventCount': self.event_count,
            'roomCount': self.room_count,
            'buildingCount': self.building_count
        }


@dataclass
class Building:
    """Venue building with running counters."""
    id: str
    room_count: int = 0
    track_count: int = 0
    event_count: int = 0
    tracks: set = field(default_factory=set, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.id,
            'roomCount': self.room_count,
            'trackCount': self.track_count,
            'eventCount': self.event_count
        }


@dataclass
class Day:
    """Conference day with running counters."""
    id: int
    date: Optional[str]
    start: Optional[str]
    end: Optional[str]
    event_count: int = 0
    track_count: int = 0
    room_count: int = 0
    building_count: int = 0
    rooms: set = field(default_factory=set, repr=False)
    buildings: set = field(default_factory=set, repr=False)
    tracks: set = field(default_factory=set, repr=False)

    @property
    def name(self) -> str:
        return f"Day {self.id}"

    def finalize(self) -> None:
        """Turn the scratch sets into counts."""
        self.room_count = len(self.rooms)
        self.building_count = len(self.buildings)
        self.track_count = len(self.tracks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'start': self.start,
            'end': self.end,
            'id': self.id,
            'name': self.name,
            'eventCount': self.event_count,
            'trackCount': self.track_count,
            'roomCount': self.room_count,
            'buildingCount': self.building_count
        }


@dataclass
class Room:
    """Room of the venue, keyed by its display name."""
    name: str
    slug: Optional[str]
    building_id: str
    floor: Optional[str]
    building: Optional[Dict[str, str]] = None
    event_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'slug': self.slug,
            'buildingId': self.building_id,
            'building': dict(self.building) if self.building else None,
            'floor': self.floor,
            'eventCount': self.event_count
        }


@dataclass
class Track:
    """Track (devroom or main track), keyed by its normalized name."""
    id: str
    name: str
    type: str
    room: str
    day: List[int] = field(default_factory=list)
    event_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'room': self.room,
            'day': list(self.day),
            'eventCount': self.event_count
        }


@dataclass
class ScheduleResult:
    """Complete snapshot produced by one run."""
    conference: Conference
    types: Dict[str, SessionType] = field(default_factory=dict)
    buildings: Dict[str, Building] = field(default_factory=dict)
    days: Dict[int, Day] = field(default_factory=dict)
    rooms: Dict[str, Room] = field(default_factory=dict)
    tracks: Dict[str, Track] = field(default_factory=dict)
    events: Dict[str, Event] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dicts and lists ready for JSON serialization."""
        return {
            'conference': self.conference.to_dict(),
            'types': {key: value.to_dict() for key, value in self.types.items()},
            'buildings': {key: value.to_dict() for key, value in self.buildings.items()},
            'days': {str(key): value.to_dict() for key, value in self.days.items()},
            'rooms': {key: value.to_dict() for key, value in self.rooms.items()},
            'tracks': {key: value.to_dict() for key, value in self.tracks.items()},
            'events': {key: value.to_dict() for key, value in self.events.items()}
        }
