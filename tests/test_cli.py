"""Tests for the command-line interface."""

import io
import json

import pytest

from singlish.cli import build_config, build_parser, main


class TestBuildConfig:
    """Tests for mapping arguments onto configuration."""

    def test_overrides(self, tmp_path):
        """Command-line values override the defaults."""
        args = build_parser().parse_args([
            "batch",
            "--input", str(tmp_path / "in.txt"),
            "--output", str(tmp_path / "out.csv"),
            "--output-format", "csv",
            "--threshold", "0.9",
            "--allow", "Slack",
            "--mapper", "trie",
            "--workers", "3",
        ])
        config = build_config(args)
        assert config.engine.confidence_threshold == 0.9
        assert config.engine.foreign_word_allow_list == {"slack"}
        assert config.engine.mapper == "trie"
        assert config.output.format == "csv"
        assert config.workers == 3

    def test_yaml_then_overrides(self, tmp_path):
        """Arguments are layered on top of a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text("engine:\n  foreign_word_allow_list: [jira]\n", encoding="utf-8")
        args = build_parser().parse_args(["convert", "x", "--config", str(path), "--allow", "slack"])
        assert build_config(args).engine.foreign_word_allow_list == {"jira", "slack"}


class TestMain:
    """Tests for main()."""

    def test_no_command(self, capsys):
        """Without a command, help is printed and 1 returned."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_convert(self, capsys):
        """Converts the positional text."""
        assert main(["convert", "mama gedhara yanavaa"]) == 0
        assert capsys.readouterr().out.strip() == "මම ගෙදර යනවා"

    def test_convert_stdin(self, capsys, monkeypatch):
        """Reads stdin when no text is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("oyaa enavadha?"))
        assert main(["convert"]) == 0
        assert capsys.readouterr().out.strip() == "ඔයා එනවද?"

    def test_convert_allow(self, capsys):
        """--allow keeps a word in Latin script."""
        assert main(["convert", "hari", "--allow", "hari"]) == 0
        assert capsys.readouterr().out.strip() == "hari"

    def test_convert_trace(self, capsys):
        """--trace prints word decisions before the output."""
        assert main(["convert", "Zoom eka", "--trace"]) == 0
        out = capsys.readouterr().out
        trace_text, _, output = out.rstrip("\n").rpartition("\n")
        trace = json.loads(trace_text)
        assert [entry["text"] for entry in trace] == ["Zoom", "eka"]
        assert output == "Zoom එක"

    def test_invalid_threshold(self, capsys):
        """Out-of-range options are reported, not raised."""
        assert main(["convert", "hari", "--threshold", "2"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        """A missing config file is reported."""
        assert main(["convert", "hari", "--config", str(tmp_path / "nope.yaml")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_rules_file(self, tmp_path, capsys):
        """A missing rule table is reported, not raised."""
        assert main(["convert", "mama", "--rules", str(tmp_path / "nope.yaml")]) == 1
        assert "Rules file not found" in capsys.readouterr().err

    def test_malformed_rules_file(self, tmp_path, capsys):
        """A rule table with a bad vowel entry is reported."""
        rules = tmp_path / "rules.yaml"
        rules.write_text("consonants: {k: ක}\nvowels: {aa: ආ}\n", encoding="utf-8")
        assert main(["check", "--rules", str(rules)]) == 1
        assert "needs [independent, sign]" in capsys.readouterr().err

    def test_unparseable_rules_file(self, tmp_path, capsys):
        """A rule table that is not valid YAML is reported."""
        rules = tmp_path / "rules.yaml"
        rules.write_text("consonants: [k: ක\n", encoding="utf-8")
        assert main(["convert", "mama", "--rules", str(rules)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_batch(self, tmp_path, capsys):
        """Batch converts a file."""
        (tmp_path / "in.txt").write_text("hari\nZoom eka\n", encoding="utf-8")
        out = tmp_path / "out.txt"
        assert main(["batch", "--input", str(tmp_path / "in.txt"), "--output", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "හරි\nZoom එක\n"
        assert "Converted 2 records" in capsys.readouterr().out

    def test_batch_requires_input(self, capsys):
        """Batch without an input file fails cleanly."""
        assert main(["batch"]) == 1
        assert "Input file is required" in capsys.readouterr().err

    def test_batch_missing_input(self, tmp_path, capsys):
        """Batch on a missing file fails cleanly."""
        assert main(["batch", "--input", str(tmp_path / "missing.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_check(self, capsys):
        """Built-in scenarios pass with the default engine."""
        assert main(["check"]) == 0
        out = capsys.readouterr().out
        assert "[FAIL]" not in out
        assert "0 scenario(s) failed" in out
        assert out.count("       note: ") == 4

    def test_evaluate(self, tmp_path, capsys):
        """Evaluate prints a JSON report."""
        gold = tmp_path / "gold.tsv"
        gold.write_text("# romanized\texpected\nhari\tහරි\nmama\tමම\n", encoding="utf-8")
        assert main(["evaluate", "--gold", str(gold)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["total"] == 2
        assert report["exact_match_rate"] == 1.0

    def test_evaluate_missing_gold(self, tmp_path, capsys):
        """A missing gold file is reported."""
        assert main(["evaluate", "--gold", str(tmp_path / "gold.tsv")]) == 1
        assert "Error" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
