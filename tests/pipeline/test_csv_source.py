# SPDX-License-Identifier: MIT
"""Tests for CSV ingestion."""

import httpx
import pytest

from pipeline.errors import ParseFailure, SourceNotFound, SourceUnavailable
from pipeline.ingesters.csv_source import fetch_csv_rows, parse_csv_text, read_csv_rows
from pipeline.utils.http import HTTPError


class TestParseCsvText:
    """Test header/row parsing."""

    def test_rows_keyed_by_header(self):
        rows = parse_csv_text("a,b\n1,2\n3,4\n")
        assert rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_strips_bom_and_header_whitespace(self):
        rows = parse_csv_text("\ufeff site_name , company\nX,Y\n")
        assert rows == [{"site_name": "X", "company": "Y"}]

    def test_skips_blank_lines(self):
        rows = parse_csv_text("\na,b\n\n1,2\n,\n")
        assert rows == [{"a": "1", "b": "2"}]

    def test_quoted_fields(self):
        rows = parse_csv_text('name,species\n"Loch A, North","Salmon, Trout"\n')
        assert rows[0]["species"] == "Salmon, Trout"

    def test_short_rows_padded(self):
        rows = parse_csv_text("a,b,c\n1\n")
        assert rows == [{"a": "1", "b": "", "c": ""}]

    def test_extra_cells_dropped(self):
        rows = parse_csv_text("a,b\n1,2,3\n")
        assert rows == [{"a": "1", "b": "2"}]

    def test_header_only(self):
        assert parse_csv_text("a,b\n") == []

    def test_empty_text(self):
        assert parse_csv_text("") == []

    def test_text_after_closing_quote_fails(self):
        with pytest.raises(ParseFailure):
            parse_csv_text('a,b\n"x"y,2\n')

    def test_unterminated_quote_fails(self):
        with pytest.raises(ParseFailure):
            parse_csv_text('a,b\n"x,2\n')


class TestReadCsvRows:
    """Test reading exports from disk."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "sites.csv"
        path.write_text("a,b\n1,2\n", encoding="utf-8")
        assert read_csv_rows(path) == [{"a": "1", "b": "2"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceNotFound) as exc_info:
            read_csv_rows(tmp_path / "missing.csv")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Data file not found: missing.csv"

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("name\nRøye\n".encode("latin-1"))
        with pytest.raises(ParseFailure):
            read_csv_rows(path)


class TestFetchCsvRows:
    """Test fetching remote exports."""

    def test_parses_response_body(self, mocker):
        response = mocker.MagicMock()
        response.content = "\ufeffname,species\nLangoya,Laks\n".encode("utf-8")
        mocker.patch("pipeline.ingesters.csv_source.fetch_with_retry", return_value=response)

        assert fetch_csv_rows("https://example.org/sites.csv") == [{"name": "Langoya", "species": "Laks"}]

    def test_http_404_is_not_found(self, mocker):
        mocker.patch(
            "pipeline.ingesters.csv_source.fetch_with_retry",
            side_effect=HTTPError("HTTP 404", status_code=404),
        )
        with pytest.raises(SourceNotFound):
            fetch_csv_rows("https://example.org/missing.csv")

    def test_http_500_is_unavailable(self, mocker):
        mocker.patch(
            "pipeline.ingesters.csv_source.fetch_with_retry",
            side_effect=HTTPError("HTTP 503", status_code=503),
        )
        with pytest.raises(SourceUnavailable) as exc_info:
            fetch_csv_rows("https://example.org/sites.csv")
        assert exc_info.value.status_code == 502

    def test_connection_error_is_unavailable(self, mocker):
        mocker.patch(
            "pipeline.ingesters.csv_source.fetch_with_retry",
            side_effect=httpx.ConnectError("connection refused"),
        )
        with pytest.raises(SourceUnavailable):
            fetch_csv_rows("https://example.org/sites.csv")
