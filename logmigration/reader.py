"""
Reading exported source documents for the CLI driver.

The export is a JSON-lines file, one source log document per line. A document
with a "file" object refers to its payload by a path relative to the
attachments directory.
"""
import json
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TypeVar

from logmigration.models import SourceLogRecord

T = TypeVar('T')


def iter_records(export_path: str, attachments_dir: Optional[str] = None) -> Iterator[SourceLogRecord]:
    """
    Yield typed records from a JSON-lines export.

    Args:
        export_path: Path to the .jsonl export
        attachments_dir: Directory payload paths are relative to
            (defaults to the export's directory)

    Raises:
        ValueError: If a line is not valid JSON
        pydantic.ValidationError: If a document is missing required fields
    """
    export = Path(export_path)
    base_dir = Path(attachments_dir) if attachments_dir else export.parent

    with export.open('r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                doc = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_number} of {export_path}: {e}")

            opener = None
            file_doc = doc.get('file')
            if file_doc is not None:
                payload_path = base_dir / file_doc.get('path', file_doc['filename'])
                opener = lambda p=payload_path: p.open('rb')

            yield SourceLogRecord.from_document(doc, opener=opener)


def batched(items: Iterable[T], size: int) -> Iterator[List[T]]:
    """Split an iterable into lists of at most size items."""
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    iterator = iter(items)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch
