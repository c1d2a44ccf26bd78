"""Conference metadata extraction."""
from typing import Any, List

from processor.models import Conference
from processor.xml_tree import as_list, get_attribute, get_text

CONFERENCE_FIELDS = (
    'acronym',
    'title',
    'subtitle',
    'venue',
    'city',
    'start',
    'end',
    'day_change',
    'timeslot_duration',
    'time_zone_name',
)


def extract_conference(conference: Any, days: List[Any]) -> Conference:
    """
    Project the conference metadata out of the flattened schedule.

    Args:
        conference: Flattened ``conference`` node (may be missing)
        days: Flattened ``day`` nodes, in document order

    Returns:
        Conference object; fields missing from the document stay None
    """
    node = conference if isinstance(conference, dict) else {}
    values = {name: get_text(node.get(name)) for name in CONFERENCE_FIELDS}

    dates = []
    for day in as_list(days):
        date = get_attribute(day, 'date')
        if date and date not in dates:
            dates.append(date)

    return Conference(days=dates, **values)
