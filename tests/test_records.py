import dataclasses

import pytest

from confirmations.records import NOTES, SAMPLE_BOOKING, BookingRecord, note_depth


class TestNotes:

    def test_digit_prefixed_lines_are_children(self):
        assert note_depth("2 working days for self-collection") == 1
        assert note_depth("A confirmation has been sent to the point of contact's email address.") == 0

    def test_sample_list_has_three_children_out_of_six(self):
        depths = [note_depth(line) for line in NOTES]
        assert len(NOTES) == 6
        assert depths.count(1) == 3
        assert depths == [0, 0, 1, 1, 0, 1]

    def test_empty_and_space_prefixed_lines_are_parents(self):
        assert note_depth("") == 0
        assert note_depth(" 2 days") == 0


class TestBookingRecord:

    def test_key_value_rows_fixed_order(self):
        labels = [label for label, _ in SAMPLE_BOOKING.key_value_rows()]
        assert labels == [
            "Event Name",
            "Start Time",
            "End Time",
            "Location",
            "Department",
            "Point of Contact",
            "Contact",
            "Remarks",
        ]

    def test_values_are_passed_through_verbatim(self):
        rows = dict(SAMPLE_BOOKING.key_value_rows())
        assert rows["Start Time"] == "9:00 AM"
        assert rows["Point of Contact"] == SAMPLE_BOOKING.point_of_contact

    def test_from_dict_coerces_items_and_defaults_missing(self):
        rec = BookingRecord.from_dict({
            "point_of_contact": "Sam",
            "selected_items": ["Castle A", "Castle B"],
        })
        assert rec.selected_items == ("Castle A", "Castle B")
        assert rec.remarks == ""
        assert rec.point_of_contact == "Sam"

    def test_from_dict_single_item_string(self):
        rec = BookingRecord.from_dict({"selected_items": "Castle A"})
        assert rec.selected_items == ("Castle A",)

    def test_record_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SAMPLE_BOOKING.remarks = "changed"
