"""Output writer for conversion records."""

import json
from pathlib import Path
from typing import Iterable, List, Literal, Union

import pandas as pd


class OutputWriter:
    """
    Writes conversion records to various output formats.

    Supports plain text, JSON Lines, JSON and CSV. Can be used as a
    context manager; records are buffered and written on exit.
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        format: Literal["txt", "jsonl", "json", "csv"] = "txt",
    ):
        """
        Initialize the output writer.

        Args:
            output_path: Path to write output file.
            format: Output format (txt, jsonl, json or csv).
        """
        self.output_path = Path(output_path)
        self.format = format
        self._buffer: List[dict] = []

        # Ensure output directory exists
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def write_record(self, record: dict) -> None:
        """
        Write a single record to the buffer.

        Args:
            record: Record with at least an ``output`` field.
        """
        self._buffer.append(record)

    def write_records(self, records: Iterable[dict]) -> None:
        """Write multiple records to the buffer."""
        for record in records:
            self.write_record(record)

    def flush(self) -> None:
        """Write buffered records to file."""
        if self.format == "txt":
            with open(self.output_path, "w", encoding="utf-8") as f:
                for record in self._buffer:
                    f.write(record["output"])
                    f.write("\n")
        elif self.format == "jsonl":
            with open(self.output_path, "w", encoding="utf-8") as f:
                for record in self._buffer:
                    f.write(json.dumps(record, ensure_ascii=False))
                    f.write("\n")
        elif self.format == "json":
            with open(self.output_path, "w", encoding="utf-8") as f:
                json.dump(self._buffer, f, ensure_ascii=False, indent=2)
        elif self.format == "csv":
            # nested trace lists do not fit in a cell; serialize them
            rows = [
                {k: json.dumps(v, ensure_ascii=False) if isinstance(v, list) else v
                 for k, v in record.items()}
                for record in self._buffer
            ]
            pd.DataFrame(rows).to_csv(self.output_path, index=False, encoding="utf-8")
        else:
            raise ValueError(f"Unsupported output format: {self.format}")

    def __enter__(self) -> "OutputWriter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - flush buffer."""
        if exc_type is None:
            self.flush()

    @property
    def count(self) -> int:
        """Return the number of records in the buffer."""
        return len(self._buffer)
