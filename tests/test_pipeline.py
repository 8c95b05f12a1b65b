"""Tests for the batch pipeline and output writer."""

import json

import pandas as pd
import pytest

from singlish.config import Config, InputConfig, OutputConfig
from singlish.data import OutputWriter
from singlish.pipeline import TransliterationPipeline, build_record
from singlish.transliterator import Transliterator


def make_config(tmp_path, input_name, input_format="txt", output_format="txt", **kwargs):
    """Config reading ``input_name`` and writing into ``tmp_path``."""
    return Config(
        input=InputConfig(input_file=tmp_path / input_name, format=input_format),
        output=OutputConfig(
            output_path=tmp_path / "out" / f"result.{output_format}",
            format=output_format,
            include_trace=kwargs.pop("include_trace", False),
        ),
        **kwargs,
    )


class TestOutputWriter:
    """Tests for OutputWriter."""

    RECORDS = [
        {"line_number": 1, "input": "hari", "output": "හරි"},
        {"line_number": 2, "input": "Zoom", "output": "Zoom"},
    ]

    def test_txt(self, tmp_path):
        """Plain text writes one output per line."""
        path = tmp_path / "out.txt"
        with OutputWriter(path, format="txt") as writer:
            writer.write_records(self.RECORDS)
            assert writer.count == 2
        assert path.read_text(encoding="utf-8") == "හරි\nZoom\n"

    def test_jsonl(self, tmp_path):
        """JSON Lines keeps Sinhala unescaped."""
        path = tmp_path / "out.jsonl"
        with OutputWriter(path, format="jsonl") as writer:
            writer.write_records(self.RECORDS)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line) for line in lines] == self.RECORDS
        assert "හරි" in lines[0]

    def test_json(self, tmp_path):
        """JSON writes a single array."""
        path = tmp_path / "out.json"
        with OutputWriter(path, format="json") as writer:
            writer.write_records(self.RECORDS)
        assert json.loads(path.read_text(encoding="utf-8")) == self.RECORDS

    def test_csv_serializes_lists(self, tmp_path):
        """Nested lists become JSON strings in CSV cells."""
        path = tmp_path / "out.csv"
        with OutputWriter(path, format="csv") as writer:
            writer.write_record({"line_number": 1, "output": "හරි", "trace": [{"text": "hari"}]})
        df = pd.read_csv(path)
        assert df.loc[0, "output"] == "හරි"
        assert json.loads(df.loc[0, "trace"]) == [{"text": "hari"}]

    def test_creates_parent_directory(self, tmp_path):
        """Missing output directories are created."""
        path = tmp_path / "nested" / "dir" / "out.txt"
        OutputWriter(path).flush()
        assert path.exists()

    def test_no_flush_on_error(self, tmp_path):
        """Nothing is written when the block raises."""
        path = tmp_path / "out.txt"
        with pytest.raises(RuntimeError):
            with OutputWriter(path) as writer:
                writer.write_records(self.RECORDS)
                raise RuntimeError("boom")
        assert not path.exists()

    def test_unsupported_format(self, tmp_path):
        """Unknown formats are rejected at flush time."""
        writer = OutputWriter(tmp_path / "out.xml", format="xml")
        with pytest.raises(ValueError):
            writer.flush()


class TestBuildRecord:
    """Tests for build_record."""

    def test_counts_and_trace(self):
        """Rows carry counts and, on request, word-level trace entries."""
        engine = Transliterator()
        text = "Zoom eka, hari"
        record = build_record(3, text, engine.convert(text), include_trace=True)
        assert record["line_number"] == 3
        assert record["output"] == "Zoom එක, හරි"
        assert record["passthrough_count"] == 1
        assert record["transliterated_count"] == 2
        assert [entry["text"] for entry in record["trace"]] == ["Zoom", "eka", "hari"]
        assert record["trace"][0]["passthrough_reason"] == "foreign_word"
        assert record["trace"][1]["label"] == "singlish_candidate"

    def test_no_trace_by_default(self):
        """The trace is omitted unless asked for."""
        engine = Transliterator()
        assert "trace" not in build_record(1, "hari", engine.convert("hari"))


class TestTransliterationPipeline:
    """Tests for TransliterationPipeline."""

    def test_txt_to_txt(self, tmp_path):
        """Each input line becomes an output line, blank lines included."""
        (tmp_path / "in.txt").write_text("mama gedhara yanavaa\n\nZoom meeting eka\n", encoding="utf-8")
        config = make_config(tmp_path, "in.txt")
        count = TransliterationPipeline(config).run()
        assert count == 3
        output = config.output.output_path.read_text(encoding="utf-8")
        assert output == "මම ගෙදර යනවා\n\nZoom meeting එක\n"

    def test_jsonl_skips_malformed(self, tmp_path):
        """Malformed or field-less JSONL lines are skipped."""
        lines = [
            json.dumps({"text": "hari"}),
            "{not json",
            json.dumps({"body": "mama"}),
            "",
            json.dumps({"text": "oyaa enavadha?"}),
        ]
        (tmp_path / "in.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")
        config = make_config(tmp_path, "in.jsonl", input_format="jsonl", output_format="jsonl")
        assert TransliterationPipeline(config).run() == 2

        rows = [
            json.loads(line)
            for line in config.output.output_path.read_text(encoding="utf-8").splitlines()
        ]
        assert [row["line_number"] for row in rows] == [1, 5]
        assert [row["output"] for row in rows] == ["හරි", "ඔයා එනවද?"]

    def test_custom_text_field(self, tmp_path):
        """The JSONL text field is configurable."""
        (tmp_path / "in.jsonl").write_text(json.dumps({"body": "mama"}) + "\n", encoding="utf-8")
        config = make_config(tmp_path, "in.jsonl", input_format="jsonl", output_format="json")
        config.input.text_field = "body"
        assert TransliterationPipeline(config).run() == 1
        rows = json.loads(config.output.output_path.read_text(encoding="utf-8"))
        assert rows[0]["output"] == "මම"

    def test_csv_with_trace(self, tmp_path):
        """CSV output carries the serialized trace."""
        (tmp_path / "in.txt").write_text("Zoom eka\n", encoding="utf-8")
        config = make_config(tmp_path, "in.txt", output_format="csv", include_trace=True)
        TransliterationPipeline(config).run()
        df = pd.read_csv(config.output.output_path)
        assert df.loc[0, "output"] == "Zoom එක"
        trace = json.loads(df.loc[0, "trace"])
        assert [entry["output"] for entry in trace] == ["Zoom", "එක"]

    def test_parallel_matches_sequential(self, tmp_path):
        """Worker processes give the same rows in input order."""
        text = "\n".join(["mama gedhara yanavaa", "Zoom meeting eka", "bonjour", "hari da?"] * 3)
        (tmp_path / "in.txt").write_text(text + "\n", encoding="utf-8")

        sequential = make_config(tmp_path, "in.txt", output_format="jsonl")
        TransliterationPipeline(sequential).run()
        expected = sequential.output.output_path.read_text(encoding="utf-8")

        parallel = make_config(tmp_path, "in.txt", output_format="jsonl", workers=2)
        parallel.output.output_path = tmp_path / "out" / "parallel.jsonl"
        TransliterationPipeline(parallel).run()
        assert parallel.output.output_path.read_text(encoding="utf-8") == expected

    def test_missing_input(self, tmp_path):
        """A missing input file raises FileNotFoundError."""
        config = make_config(tmp_path, "missing.txt")
        with pytest.raises(FileNotFoundError):
            TransliterationPipeline(config).run()

    def test_no_input_configured(self):
        """Running without an input file raises ValueError."""
        with pytest.raises(ValueError):
            TransliterationPipeline(Config()).run()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
