# records.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Tuple


@dataclass(frozen=True)
class BookingRecord:
    """
    One reservation as printed on the confirmation.
    Every value is display text and is drawn verbatim; nothing here is parsed.
    """
    point_of_contact: str = ""
    booking_dates: str = ""
    selected_items: Tuple[str, ...] = field(default_factory=tuple)
    collection_method: str = ""
    event_name: str = ""
    start_time: str = ""
    end_time: str = ""
    location: str = ""
    department: str = ""
    contact: str = ""
    remarks: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "BookingRecord":
        items = data.get("selected_items") or ()
        if isinstance(items, str):
            items = (items,)
        return cls(
            point_of_contact=str(data.get("point_of_contact") or ""),
            booking_dates=str(data.get("booking_dates") or ""),
            selected_items=tuple(str(i) for i in items),
            collection_method=str(data.get("collection_method") or ""),
            event_name=str(data.get("event_name") or ""),
            start_time=str(data.get("start_time") or ""),
            end_time=str(data.get("end_time") or ""),
            location=str(data.get("location") or ""),
            department=str(data.get("department") or ""),
            contact=str(data.get("contact") or ""),
            remarks=str(data.get("remarks") or ""),
        )

    def key_value_rows(self) -> List[Tuple[str, str]]:
        """Rows of the "Key Event Details" section, in print order."""
        return [
            ("Event Name", self.event_name),
            ("Start Time", self.start_time),
            ("End Time", self.end_time),
            ("Location", self.location),
            ("Department", self.department),
            ("Point of Contact", self.point_of_contact),
            ("Contact", self.contact),
            ("Remarks", self.remarks),
        ]


# ---- Notes ----
# A line that starts with a digit is a sub-item of the line above it.
# Depth is inferred from the text only; there is no explicit nesting data.
_CHILD_NOTE = re.compile(r"^\d")

NOTES: Tuple[str, ...] = (
    "A confirmation has been sent to the point of contact's email address.",
    "Please collect the bouncy castles from the store no later than:",
    "2 working days for self-collection",
    "3 working days for delivery by our logistics team",
    "Castles must be returned clean and dry within:",
    "1 working day after the event ends",
)


def note_depth(line: str) -> int:
    return 1 if _CHILD_NOTE.match(line or "") else 0


SAMPLE_BOOKING = BookingRecord(
    point_of_contact="Nurul Aisyah",
    booking_dates="14 Mar 2025 - 16 Mar 2025",
    selected_items=(
        "Jungle Safari Bouncy Castle (5m x 5m)",
        "Rainbow Slide Combo (7m x 4m)",
    ),
    collection_method="Self-collection",
    event_name="Family Day 2025",
    start_time="9:00 AM",
    end_time="5:00 PM",
    location="Block B Courtyard, Level 1",
    department="Human Resources",
    contact="+65 6123 4567",
    remarks="Please provide two extension cords for the blowers.",
)
