"""Static reference data for the FOSDEM schedule."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

SCHEDULE_LINK = 'https://fosdem.org/{year}/schedule/xml'
STREAM_LINK = 'https://stream.fosdem.org/{room_id}.m3u8'
CHAT_LINK = 'https://chat.fosdem.org/#/room/#{room_id}:fosdem.org'

TYPES = MappingProxyType({
    'keynote': 'Keynotes',
    'maintrack': 'Main tracks',
    'devroom': 'Developer rooms',
    'lightningtalk': 'Lightning talks',
    'other': 'Other',
})

BUILDINGS = ('J', 'H', 'AW', 'U', 'K')

# Rooms in these buildings have no streaming setup
NON_LIVE_ROOM_PREFIXES = ('B.', 'I.', 'S.')

ONLINE_ROOM_PREFIX = 'D.'


@dataclass(frozen=True)
class ReferenceTables:
    """Session type taxonomy, building ids and link templates used for one run."""
    types: Mapping[str, str] = field(default_factory=lambda: TYPES)
    buildings: tuple = BUILDINGS
    stream_link: str = STREAM_LINK
    chat_link: str = CHAT_LINK


DEFAULT_TABLES = ReferenceTables()
