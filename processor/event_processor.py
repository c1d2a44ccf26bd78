"""Event classifier applying the schedule's business rules to raw events."""
import logging
import re
from typing import Any, List, Optional

from processor.constants import (
    DEFAULT_TABLES,
    NON_LIVE_ROOM_PREFIXES,
    ONLINE_ROOM_PREFIX,
    ReferenceTables,
)
from processor.models import Attachment, Event, Link, Stream
from processor.xml_tree import as_list, get_attribute, get_text

logger = logging.getLogger(__name__)

STATUS_CANCELED = 'canceled'
STATUS_AMENDMENT = 'amendment'
STATUS_RUNNING = 'running'

TYPE_ALIASES = {
    'lightning': 'lightningtalk',
    'lecture': 'keynote',
}
FALLBACK_TYPE = 'other'
STAND_TRACK = 'stand'

# Width of the "[CHANGED] " style prefix on amended titles
AMENDMENT_PREFIX_LENGTH = 10

CHAT_ROOM_PATTERN = re.compile(r'^[A-Z]\.')
WHITESPACE_PATTERN = re.compile(r'\s')


def get_room_name(name: str) -> str:
    """Return the display name of a room, marking online rooms."""
    if name.startswith(ONLINE_ROOM_PREFIX):
        return f"{name} (online)"
    return name


def get_link_type(href: str) -> Optional[str]:
    """Infer a link's media type from its file extension."""
    if href.endswith('.mp4'):
        return 'video/mp4'
    if href.endswith('.webm'):
        return 'video/webm'
    return None


def get_status(title: str) -> str:
    """Detect the status of an event from its title."""
    lower_title = title.lower()
    if STATUS_CANCELED in lower_title:
        return STATUS_CANCELED
    if STATUS_AMENDMENT in lower_title:
        return STATUS_AMENDMENT
    return STATUS_RUNNING


def get_track_key(track: str) -> str:
    """Normalize a track name into its identity key."""
    return WHITESPACE_PATTERN.sub('', track.lower())


class EventProcessor:
    """Classifier turning raw schedule events into enriched Event objects."""

    def __init__(self, tables: ReferenceTables = DEFAULT_TABLES):
        """
        Initialize the classifier.

        Args:
            tables: Session types and link templates to classify against
        """
        self.tables = tables

    def process_event(
        self,
        raw_event: Any,
        is_live: bool,
        room_name: str,
        day: int
    ) -> Optional[Event]:
        """
        Classify a single raw event.

        Args:
            raw_event: Flattened event node
            is_live: Whether the event happens on the live day
            room_name: Display name of the room hosting the event
            day: Index of the conference day

        Returns:
            Event object or None if the event is excluded
        """
        event_id = get_attribute(raw_event, 'id')

        title = self._get_child_text(raw_event, 'title')
        if not title:
            logger.debug(f"Skipping event {event_id} in {room_name}: missing title")
            return None

        status = get_status(title)
        if status == STATUS_CANCELED:
            logger.debug(f"Skipping canceled event {event_id}: '{title}'")
            return None

        raw_type = self._get_child_text(raw_event, 'type')
        track = self._get_child_text(raw_event, 'track')
        if not raw_type or not track:
            logger.debug(
                f"Skipping event {event_id} '{title}': missing type or track"
            )
            return None

        event_type = self._get_type(raw_type)
        track_key = get_track_key(track)

        if event_type == FALLBACK_TYPE and track == STAND_TRACK:
            logger.debug(f"Skipping stand entry {event_id} '{title}'")
            return None

        return Event(
            id=event_id,
            day=day,
            is_live=is_live,
            status=status,
            type=event_type,
            track=track,
            track_key=track_key,
            title=self._get_title(title, status),
            room=room_name,
            start_time=self._get_child_text(raw_event, 'start'),
            duration=self._get_child_text(raw_event, 'duration'),
            persons=self._process_persons(raw_event.get('persons')),
            links=self._process_links(raw_event.get('links')),
            attachments=self._process_attachments(raw_event.get('attachments')),
            streams=self._build_stream_info(room_name),
            chat=self._build_chat_info(room_name),
            url=self._get_child_text(raw_event, 'url'),
            language=self._get_child_text(raw_event, 'language'),
            feedback_url=self._get_child_text(raw_event, 'feedback_url'),
            subtitle=self._get_child_text(raw_event, 'subtitle'),
            abstract=self._get_child_text(raw_event, 'abstract'),
            description=self._get_child_text(raw_event, 'description')
        )

    def _get_child_text(self, raw_event: Any, name: str) -> Optional[str]:
        if not isinstance(raw_event, dict):
            return None
        return get_text(raw_event.get(name))

    def _get_type(self, raw_type: str) -> str:
        """
        Resolve the session type of an event.

        Args:
            raw_type: Type as written in the schedule

        Returns:
            Session type id from the taxonomy, or the catch-all type
        """
        if raw_type in TYPE_ALIASES:
            return TYPE_ALIASES[raw_type]

        if raw_type in self.tables.types:
            return raw_type

        logger.debug(f"Unknown event type '{raw_type}', using '{FALLBACK_TYPE}'")
        return FALLBACK_TYPE

    def _get_title(self, title: str, status: str) -> str:
        if status == STATUS_AMENDMENT:
            return title[AMENDMENT_PREFIX_LENGTH:] or title
        return title

    def _process_persons(self, persons: Any) -> List[str]:
        """
        Collect speaker names.

        Args:
            persons: ``persons`` node holding one or more ``person`` nodes

        Returns:
            Ordered list of display names
        """
        if not isinstance(persons, dict):
            return []

        names = []
        for person in as_list(persons.get('person')):
            name = get_text(person)
            if name:
                names.append(name)
        return names

    def _process_links(self, links: Any) -> List[Link]:
        if not isinstance(links, dict):
            return []

        result = []
        for link in as_list(links.get('link')):
            href = get_attribute(link, 'href')
            if not href:
                continue
            result.append(Link(
                href=href,
                title=get_text(link) or '',
                type=get_link_type(href)
            ))
        return result

    def _process_attachments(self, attachments: Any) -> List[Attachment]:
        if not isinstance(attachments, dict):
            return []

        result = []
        for attachment in as_list(attachments.get('attachment')):
            href = get_attribute(attachment, 'href')
            if not href:
                continue
            result.append(Attachment(
                type=get_attribute(attachment, 'type'),
                href=href,
                title=get_text(attachment) or ''
            ))
        return result

    def _build_stream_info(self, room_name: str) -> List[Stream]:
        """
        Build the live stream entries for a room.

        Args:
            room_name: Display name of the room

        Returns:
            One stream entry, or an empty list for rooms without streaming
        """
        if room_name.startswith(NON_LIVE_ROOM_PREFIXES):
            return []

        room_id = room_name.lower().replace('.', '')
        return [Stream(href=self.tables.stream_link.format(room_id=room_id))]

    def _build_chat_info(self, room_name: str) -> Optional[str]:
        if CHAT_ROOM_PATTERN.match(room_name):
            return self.tables.chat_link.format(room_id=room_name[2:])
        return None
