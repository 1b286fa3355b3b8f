"""Tests for the CSV and PDF member reports."""

import csv
import io
from datetime import datetime

from choir_registry.domain.entities import Member
from choir_registry.infrastructure.reports import (
    COLUMNS,
    render_members_csv,
    render_members_pdf,
)


def _members():
    return [
        Member(
            id="a" * 32,
            full_name="Ifeoma <Bright> & Co",
            part="Tenor",
            zone="Lagos",
            join_year=2020,
            position=["Usher", "Choir Lead"],
            instruments=["Piano"],
            created_at=datetime(2024, 5, 1, 10, 30),
        ),
        Member(id="b" * 32, full_name="Bola"),
    ]


def test_csv_has_header_and_one_row_per_member():
    content = render_members_csv(_members())

    assert content.startswith(b"\xef\xbb\xbf")
    rows = list(csv.reader(io.StringIO(content.decode("utf-8-sig"))))
    assert rows[0] == [column.title for column in COLUMNS]
    assert len(rows) == 3

    first = dict(zip(rows[0], rows[1]))
    assert first["Full Name"] == "Ifeoma <Bright> & Co"
    assert first["Position"] == "Usher, Choir Lead"
    assert first["Join Year"] == "2020"
    assert first["Registered"] == "2024-05-01"

    second = dict(zip(rows[0], rows[2]))
    assert second["Join Year"] == ""
    assert second["Instruments"] == ""


def test_pdf_renders_document():
    content = render_members_pdf(_members())

    assert content.startswith(b"%PDF")
    assert len(content) > 1000


def test_pdf_renders_empty_member_list():
    assert render_members_pdf([]).startswith(b"%PDF")
