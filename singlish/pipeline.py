"""Batch transliteration pipeline."""

import json
import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterator, Optional

from tqdm import tqdm

from .config import Config, EngineConfig
from .data import OutputWriter
from .models import ConversionResult
from .transliterator import Transliterator

logger = logging.getLogger(__name__)


def build_record(
    line_number: int, text: str, result: ConversionResult, include_trace: bool = False
) -> dict:
    """Flatten a conversion result into an output row.

    Args:
        line_number: 1-based source line
        text: Input text
        result: Conversion result
        include_trace: Whether to attach per-token outcomes

    Returns:
        Row dictionary
    """
    record = {
        "line_number": line_number,
        "input": text,
        "output": result.output_text,
        "passthrough_count": result.dropped_or_passthrough_count,
        "transliterated_count": result.transliterated_count,
    }
    if include_trace:
        record["trace"] = [
            outcome.to_dict() for outcome in result.outcomes if outcome.token.is_word
        ]
    return record


def _convert_record_worker(args: tuple) -> tuple[int, dict]:
    """Worker for parallel processing. Must be module-level for pickling.

    Args:
        args: (line_number, text, engine_config_dict, include_trace)

    Returns:
        (line_number, row dict)
    """
    line_number, text, engine_config, include_trace = args
    engine = _worker_engine(json.dumps(engine_config, sort_keys=True))
    return line_number, build_record(line_number, text, engine.convert(text), include_trace)


_WORKER_ENGINES: dict[str, Transliterator] = {}


def _worker_engine(key: str) -> Transliterator:
    """Build each worker's engine once per configuration."""
    if key not in _WORKER_ENGINES:
        _WORKER_ENGINES[key] = Transliterator(EngineConfig(**json.loads(key)))
    return _WORKER_ENGINES[key]


class TransliterationPipeline:
    """Pipeline for converting text files line by line or record by record."""

    def __init__(self, config: Config, engine: Optional[Transliterator] = None):
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration
            engine: Pre-built engine (built from ``config.engine`` if omitted)
        """
        self.config = config
        self.engine = engine or Transliterator(config.engine)

    def read_records(self, input_path: Path) -> Iterator[tuple[int, str]]:
        """Read input texts.

        Plain text files yield one record per line. JSONL files yield the
        configured text field of each object; malformed lines are skipped.

        Args:
            input_path: Path to the input file

        Yields:
            (line_number, text) tuples
        """
        fmt = self.config.input.format
        field = self.config.input.text_field
        with open(input_path, "r", encoding="utf-8") as infile:
            for line_number, line in enumerate(infile, 1):
                line = line.rstrip("\r\n")
                if fmt == "txt":
                    yield line_number, line
                    continue
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(f"Skipping malformed JSON at line {line_number}")
                    continue
                if not isinstance(record, dict) or not isinstance(record.get(field), str):
                    logger.warning(f"Line {line_number} has no string field {field!r}")
                    continue
                yield line_number, record[field]

    def _process_sequential(self, records: list[tuple[int, str]]) -> list[dict]:
        """Convert records in this process."""
        include_trace = self.config.output.include_trace
        rows = []
        for line_number, text in tqdm(records, desc="Transliterating"):
            result = self.engine.convert(text)
            rows.append(build_record(line_number, text, result, include_trace))
        return rows

    def _process_parallel(self, records: list[tuple[int, str]]) -> list[dict]:
        """Convert records using multiple worker processes."""
        workers = self.config.workers
        engine_config = self.config.engine.model_dump(mode="json")
        include_trace = self.config.output.include_trace

        results_by_line = {}
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(
                    _convert_record_worker, (line_number, text, engine_config, include_trace)
                ): line_number
                for line_number, text in records
            }
            for future in tqdm(
                as_completed(futures), total=len(futures), desc=f"Transliterating ({workers} workers)"
            ):
                line_number, row = future.result()
                results_by_line[line_number] = row

        return [results_by_line[line_number] for line_number in sorted(results_by_line)]

    def process_file(self, input_path: Path) -> int:
        """Convert an input file and write the configured output.

        Args:
            input_path: Path to the input file

        Returns:
            Number of records converted
        """
        logger.info(f"Reading from: {input_path}")
        records = list(self.read_records(input_path))

        if self.config.workers <= 1:
            rows = self._process_sequential(records)
        else:
            rows = self._process_parallel(records)

        with OutputWriter(self.config.output.output_path, format=self.config.output.format) as writer:
            writer.write_records(rows)

        passthrough = sum(row["passthrough_count"] for row in rows)
        converted = sum(row["transliterated_count"] for row in rows)
        logger.info(
            f"Converted {len(rows)} records ({converted} words transliterated, "
            f"{passthrough} passed through) -> {self.config.output.output_path}"
        )
        return len(rows)

    def run(self) -> int:
        """Run the pipeline.

        Returns:
            Number of records converted
        """
        if not self.config.input.input_file:
            raise ValueError("Input file not specified in configuration")

        if not self.config.input.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {self.config.input.input_file}")

        return self.process_file(self.config.input.input_file)
