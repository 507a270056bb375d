"""Unit tests for the IRS exempt-organization CSV import."""

from unittest.mock import MagicMock

import pytest

from src.domains.nonprofits.irs_import import import_csv, iter_irs_records, parse_irs_row
from tests.conftest import make_mock_session

CSV_TEXT = (
    "EIN,NAME,STREET,CITY,STATE,ZIP,NTEE_CD,DEDUCTIBILITY,STATUS,CLASSIFICATION\n"
    "530196605,AMERICAN NATIONAL RED CROSS,431 18TH ST NW,WASHINGTON,DC,20006,P20,1,01,1000\n"
    ",NAMELESS EIN ROW,,,,,,,,\n"
    "131760110,UNITED STATES FUND FOR UNICEF,125 MAIDEN LN,NEW YORK,NY,10038,Q33,1,01,1000\n"
)


@pytest.fixture
def irs_csv(tmp_path):
    path = tmp_path / "eo_dc.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


class TestParseIRSRow:
    def test_maps_columns(self):
        record = parse_irs_row(
            {"EIN": "530196605", "NAME": " AMERICAN NATIONAL RED CROSS ", "STATE": "DC"}
        )
        assert record["ein"] == "53-0196605"
        assert record["name"] == "AMERICAN NATIONAL RED CROSS"
        assert record["state"] == "DC"
        assert record["zip_code"] == ""

    @pytest.mark.parametrize(
        "row",
        [
            {"EIN": "", "NAME": "NO EIN"},
            {"EIN": "530196605", "NAME": "  "},
            {"NAME": "MISSING EIN COLUMN"},
        ],
    )
    def test_incomplete_rows_skipped(self, row):
        assert parse_irs_row(row) is None


class TestIterIRSRecords:
    def test_reads_file(self, irs_csv):
        records = list(iter_irs_records(irs_csv))
        assert len(records) == 3
        assert records[1] is None
        assert records[2]["ein"] == "13-1760110"

    def test_byte_order_mark_ignored(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_text(CSV_TEXT, encoding="utf-8-sig")
        assert list(iter_irs_records(path))[0]["ein"] == "53-0196605"


class TestImportCSV:
    @pytest.mark.asyncio
    async def test_batches_and_counts(self, irs_csv):
        session = make_mock_session()
        inserted = MagicMock()
        inserted.rowcount = 1
        session.execute.return_value = inserted

        summary = await import_csv(session, irs_csv, batch_size=1)

        assert summary == {"file": "eo_dc.csv", "imported": 2, "skipped": 1}
        assert session.execute.await_count == 2
        assert session.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_existing_eins_not_counted(self, irs_csv):
        session = make_mock_session()
        session.execute.return_value.rowcount = 0

        summary = await import_csv(session, irs_csv)

        assert summary["imported"] == 0
        assert session.execute.await_count == 1
