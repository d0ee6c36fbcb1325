import pytest

from fatigue.features.analysis.pipeline.ingestion import (
    IngestionService,
    InvalidFileError,
    MissingColumnsError,
    ParseError,
)


def test_validate_upload_rejects_non_csv_extension():
    service = IngestionService()

    with pytest.raises(InvalidFileError) as exc_info:
        service.validate_upload("report.xlsx", 100)

    assert exc_info.value.message == "Please select a CSV file."
    assert exc_info.value.too_large is False


def test_validate_upload_accepts_uppercase_extension():
    IngestionService().validate_upload("EXPORT.CSV", 100)


def test_validate_upload_rejects_files_over_limit():
    service = IngestionService()

    service.validate_upload("big.csv", 10 * 1024 * 1024)
    with pytest.raises(InvalidFileError) as exc_info:
        service.validate_upload("big.csv", 10 * 1024 * 1024 + 1)

    assert exc_info.value.message == "File size must be less than 10MB."
    assert exc_info.value.too_large is True


def test_parse_csv_strips_bom_and_pads_short_rows():
    service = IngestionService()
    content = "\ufeffid,email,customer_id\n1,a@x.com\n2,b@x.com,c2,extra\n".encode()

    header, rows = service.parse_csv(content)

    assert header == ["id", "email", "customer_id"]
    assert rows == [
        {"id": "1", "email": "a@x.com", "customer_id": ""},
        {"id": "2", "email": "b@x.com", "customer_id": "c2"},
    ]


def test_parse_csv_handles_quoted_fields():
    content = b'id,email,campaign_name\n1,a@x.com,"Promo, spring ""24"""\n'

    _, rows = IngestionService().parse_csv(content)

    assert rows[0]["campaign_name"] == 'Promo, spring "24"'


def test_parse_csv_rejects_undecodable_bytes():
    with pytest.raises(ParseError) as exc_info:
        IngestionService().parse_csv(b"id,email\n1,\xff\xfe\n", "bad.csv")

    assert exc_info.value.message.startswith("Error parsing CSV:")
    assert exc_info.value.filename == "bad.csv"


def test_parse_csv_rejects_oversized_fields():
    content = b"id,email\n1," + b"x" * 200_000 + b"\n"

    with pytest.raises(ParseError):
        IngestionService().parse_csv(content)


def test_missing_columns_are_reported_in_order():
    with pytest.raises(MissingColumnsError) as exc_info:
        IngestionService().check_required_columns(["id", "email"])

    assert exc_info.value.missing_columns == ["customer_id", "created_RFC3339"]
    assert exc_info.value.message == "Missing required columns: customer_id, created_RFC3339"


def test_recipient_column_satisfies_email_requirement():
    service = IngestionService()

    service.check_required_columns(["customer_id", "recipient", "created_RFC3339"])

    with pytest.raises(MissingColumnsError) as exc_info:
        service.check_required_columns(["customer_id", "created_RFC3339"])
    assert exc_info.value.missing_columns == ["email"]


def test_prefilter_drops_blank_ids_only_when_id_column_exists():
    service = IngestionService()
    rows = [{"id": "1"}, {"id": ""}, {"id": "  "}, {"id": "2"}]

    assert service.prefilter_rows(["id"], rows) == [{"id": "1"}, {"id": "2"}]
    assert service.prefilter_rows(["email"], rows) == rows


def test_ingest_counts_prefiltered_and_rejected_rows(sample_csv):
    batch = IngestionService().ingest("sample.csv", sample_csv)

    assert batch.raw_row_count == 10
    assert batch.prefiltered_rows == 1
    assert batch.total_records == 9
    assert batch.rejected_rows == 1
    assert len(batch.events) == 8
    assert [event.recipient_email for event in batch.events[:4]] == [
        "a@x.com",
        "a@x.com",
        "a@x.com",
        "b@x.com",
    ]


def test_ingest_rejects_missing_columns_even_without_rows(build_csv):
    content = build_csv([], header=["id", "email"])

    with pytest.raises(MissingColumnsError):
        IngestionService().ingest("empty.csv", content)


def test_ingest_header_only_file_yields_no_events(build_csv):
    batch = IngestionService().ingest("empty.csv", build_csv([]))

    assert batch.events == []
    assert batch.total_records == 0
    assert batch.rejected_rows == 0


def test_ingest_rejects_out_of_range_timestamps_without_failing(build_csv):
    good = {"id": "1", "customer_id": "c1", "email": "a@x.com"}
    out_of_range = {"id": "2", "customer_id": "c2", "email": "b@x.com"}
    rows = [
        {**good, "created_RFC3339": "2024-01-01T00:00:00Z"},
        {**out_of_range, "created_RFC3339": "0001-01-01T00:00:00+01:00"},
    ]

    batch = IngestionService().ingest("edge.csv", build_csv(rows))

    assert batch.total_records == 2
    assert batch.rejected_rows == 1
    assert [event.recipient_email for event in batch.events] == ["a@x.com"]
