"""Tests for the command-line interface."""

import json
from unittest.mock import MagicMock, patch

import pytest

from app.cli import create_parser, main


class TestParser:
    """Test argument parsing."""

    def test_classify_arguments(self) -> None:
        args = create_parser().parse_args(
            ["classify", "--title", "Guide", "--content", "maize", "--month", "4"]
        )
        assert args.command == "classify"
        assert args.title == "Guide"
        assert args.content == "maize"
        assert args.month == 4

    def test_content_and_file_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["classify", "-c", "x", "-f", "y.txt"])

    def test_month_out_of_range(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["classify", "--month", "13"])


class TestClassifyCommand:
    """Test the local classify command."""

    def test_prints_json(self, capsys) -> None:
        code = main([
            "classify",
            "--title", "Maize Planting Guide",
            "--content", "This guide explains kupanda mahindi during masika season in Arusha.",
            "--month", "2",
        ])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["crops"] == ["maize"]
        assert output["seasons"] == ["Masika (Long Rains)"]
        assert output["subcategory"] == "maize_crop_production_guide"

    def test_reads_file(self, tmp_path, capsys) -> None:
        doc = tmp_path / "doc.txt"
        doc.write_text("Bei ya korosho sokoni Mtwara", encoding="utf-8")

        code = main(["classify", "--file", str(doc), "--month", "1"])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["crops"] == ["cashew"]
        assert output["category"] == "Market Information"

    def test_missing_file(self, tmp_path, capsys) -> None:
        code = main(["classify", "--file", str(tmp_path / "missing.txt")])

        assert code == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_non_utf8_file(self, tmp_path, capsys) -> None:
        doc = tmp_path / "latin1.txt"
        doc.write_bytes("Café de Kagera".encode("latin-1") + b"\xff")

        code = main(["classify", "--file", str(doc)])

        assert code == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()


class TestClassifySourceCommand:
    """Test classifying a stored source."""

    @patch("app.db.supabase_client.get_supabase_client")
    def test_classifies_and_stores(self, mock_get_client: MagicMock, capsys) -> None:
        supabase = MagicMock()
        supabase.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = [
            {"title": "Coffee guide", "content": "Growing arabica in Kilimanjaro", "summary": None}
        ]
        mock_get_client.return_value = supabase

        code = main(["classify-source", "--source-id", "src-1"])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["crops"] == ["coffee"]
        assert "kilimanjaro" in output["regions"]
        supabase.table.return_value.update.assert_called_once()

    @patch("app.db.supabase_client.get_supabase_client")
    def test_missing_source(self, mock_get_client: MagicMock, capsys) -> None:
        supabase = MagicMock()
        supabase.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []
        mock_get_client.return_value = supabase

        code = main(["classify-source", "--source-id", "nope"])

        assert code == 1
        assert "Source not found" in capsys.readouterr().err
        supabase.table.return_value.update.assert_not_called()

    @patch("app.db.supabase_client.get_supabase_client")
    def test_client_unavailable(self, mock_get_client: MagicMock, capsys) -> None:
        mock_get_client.side_effect = ValueError("Failed to create Supabase client: bad url")

        code = main(["classify-source", "--source-id", "src-1"])

        assert code == 1
        assert "Failed to create Supabase client" in capsys.readouterr().err
