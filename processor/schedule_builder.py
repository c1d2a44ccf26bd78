"""Aggregation of the flattened schedule into the snapshot tables."""
import logging
import re
from typing import Any, List, Optional

from processor.conference import extract_conference
from processor.constants import DEFAULT_TABLES, ReferenceTables
from processor.errors import InputShapeError
from processor.event_processor import EventProcessor, get_room_name
from processor.models import (
    Building,
    Conference,
    Day,
    Event,
    Room,
    ScheduleResult,
    SessionType,
    Track,
)
from processor.xml_tree import as_list, flatten_data, get_attribute, parse_document

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r'\d{4}')
BUILDING_PATTERN = re.compile(r'^(AW|[A-Z])')
FLOOR_PATTERN = re.compile(r'^[A-Z]+\.?([0-9]+)')

# Events on this day are flagged as live
LIVE_DAY_INDEX = 1


def validate_year(year: Any) -> str:
    """
    Check that a schedule edition key looks like a four digit year.

    Raises:
        InputShapeError: If the key has any other shape
    """
    if not isinstance(year, str) or not YEAR_PATTERN.fullmatch(year):
        raise InputShapeError("Invalid year format. Expected YYYY")
    return year


def get_building_id(room_name: str) -> str:
    match = BUILDING_PATTERN.match(room_name)
    return match.group(1) if match else ''


def get_floor(room_name: str) -> Optional[str]:
    match = FLOOR_PATTERN.match(room_name)
    return match.group(1) if match else None


class ScheduleBuilder:
    """Builds the type, building, day, room, track and event tables in one pass."""

    def __init__(
        self,
        tables: ReferenceTables = DEFAULT_TABLES,
        processor: Optional[EventProcessor] = None
    ):
        """
        Initialize the builder.

        Args:
            tables: Session types and buildings to aggregate into
            processor: Event classifier (default: one using the same tables)
        """
        self.tables = tables
        self.processor = processor or EventProcessor(tables)

    def build(self, days: List[Any], conference: Conference) -> ScheduleResult:
        """
        Aggregate every day, room and event of the schedule.

        Args:
            days: Flattened ``day`` nodes in document order
            conference: Conference metadata to attach to the result

        Returns:
            ScheduleResult with all tables filled in and scratch sets cleared
        """
        result = ScheduleResult(conference=conference)

        for type_id, name in self.tables.types.items():
            result.types[type_id] = SessionType(id=type_id, name=name)

        for building_id in self.tables.buildings:
            result.buildings[building_id] = Building(id=building_id)

        for position, day_node in enumerate(as_list(days), start=1):
            day = self._get_day(result, day_node, position)

            for room_node in as_list(day_node.get('room') if isinstance(day_node, dict) else None):
                self._process_room(result, day, room_node)

            day.finalize()
            self._update_type_counts(result)

        for building in result.buildings.values():
            building.track_count = len(building.tracks)

        self._clear_scratch_sets(result)

        logger.info(
            f"Built schedule with {len(result.events)} events, "
            f"{len(result.tracks)} tracks, {len(result.rooms)} rooms "
            f"over {len(result.days)} days"
        )
        return result

    def _get_day(self, result: ScheduleResult, day_node: Any, position: int) -> Day:
        raw_index = get_attribute(day_node, 'index')
        try:
            index = int(raw_index)
        except (TypeError, ValueError):
            logger.warning(
                f"Day without a valid index ({raw_index!r}), using position {position}"
            )
            index = position

        if index not in result.days:
            result.days[index] = Day(
                id=index,
                date=get_attribute(day_node, 'date'),
                start=get_attribute(day_node, 'start'),
                end=get_attribute(day_node, 'end')
            )
        return result.days[index]

    def _process_room(self, result: ScheduleResult, day: Day, room_node: Any) -> None:
        """
        Register a room and aggregate every event held in it.

        Args:
            result: Snapshot being built
            day: Day the room schedule belongs to
            room_node: Flattened ``room`` node
        """
        raw_name = get_attribute(room_node, 'name')
        if not raw_name:
            logger.warning(f"Skipping room without a name on day {day.id}")
            return

        room_name = get_room_name(raw_name)

        if room_name not in result.rooms:
            building_id = get_building_id(room_name)
            building = result.buildings.get(building_id)
            result.rooms[room_name] = Room(
                name=room_name,
                slug=get_attribute(room_node, 'slug'),
                building_id=building_id,
                building={'id': building_id} if building else None,
                floor=get_floor(room_name)
            )
            if building:
                building.room_count += 1

        room = result.rooms[room_name]

        for raw_event in as_list(room_node.get('event')):
            event = self.processor.process_event(
                raw_event,
                day.id == LIVE_DAY_INDEX,
                room_name,
                day.id
            )
            if event:
                self._add_event(result, day, room, event)

    def _add_event(self, result: ScheduleResult, day: Day, room: Room, event: Event) -> None:
        result.events[event.id] = event
        room.event_count += 1
        day.event_count += 1

        track = result.tracks.get(event.track_key)
        if track is None:
            track = Track(
                id=event.track_key,
                name=event.track,
                type=event.type,
                room=room.name,
                day=[day.id]
            )
            result.tracks[event.track_key] = track
        elif day.id not in track.day:
            track.day.append(day.id)
        track.event_count += 1

        session_type = result.types.get(event.type)
        if session_type:
            session_type.event_count += 1
            session_type.rooms.add(room.name)
            session_type.buildings.add(room.building_id)
        else:
            logger.warning(
                f"Event {event.id} has type '{event.type}' which is not in the taxonomy"
            )

        day.rooms.add(room.name)
        day.buildings.add(room.building_id)
        day.tracks.add(event.track_key)

        building = result.buildings.get(room.building_id)
        if building:
            building.event_count += 1
            building.tracks.add(event.track_key)

    def _update_type_counts(self, result: ScheduleResult) -> None:
        for session_type in result.types.values():
            session_type.room_count = len(session_type.rooms)
            session_type.building_count = len(session_type.buildings)
            session_type.track_count = sum(
                1 for track in result.tracks.values() if track.type == session_type.id
            )

    def _clear_scratch_sets(self, result: ScheduleResult) -> None:
        for session_type in result.types.values():
            session_type.rooms = set()
            session_type.buildings = set()

        for day in result.days.values():
            day.rooms = set()
            day.buildings = set()
            day.tracks = set()

        for building in result.buildings.values():
            building.tracks = set()


def build_data(
    text: str,
    year: str,
    tables: ReferenceTables = DEFAULT_TABLES
) -> ScheduleResult:
    """
    Turn a raw schedule document into the conference snapshot.

    Args:
        text: Raw schedule XML
        year: Edition of the conference (YYYY)
        tables: Reference tables to aggregate into

    Returns:
        ScheduleResult for the whole schedule

    Raises:
        InputShapeError: If the year is malformed or the document has no schedule
    """
    validate_year(year)
    logger.info(f"Building schedule data for {year}")

    document = flatten_data(parse_document(text))
    schedule = document.get('schedule')
    if not isinstance(schedule, dict):
        raise InputShapeError("Document is not a schedule")

    days = as_list(schedule.get('day'))
    conference = extract_conference(schedule.get('conference'), days)

    return ScheduleBuilder(tables).build(days, conference)
