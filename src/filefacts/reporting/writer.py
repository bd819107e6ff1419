"""Report writers for filefacts.

``FileReport`` flattens a ``MetadataView`` into plain values.  The
``CSVReportWriter`` writes each report immediately, while
``JSONReportWriter`` collects reports and writes them when flushed.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..digest.engine import HashAlgorithm
from ..metadata.view import MetadataView

BASE_FIELDS = [
    'path',
    'size_bytes',
    'size',
    'created',
    'accessed',
    'modified',
    'hidden',
    'read_only',
    'symlink',
    'lock_state',
    'file_version',
    'product_version',
]


@dataclass
class FileReport:
    path: str
    size_bytes: int
    size: str
    created: Optional[str]
    accessed: str
    modified: str
    hidden: bool
    read_only: bool
    symlink: bool
    lock_state: str
    file_version: Optional[str] = None
    product_version: Optional[str] = None
    digests: Dict[str, Optional[str]] = field(default_factory=dict)


def build_report(
    view: MetadataView,
    algorithms: Iterable[Union[str, HashAlgorithm]] = (),
    decimals: int = 2,
) -> FileReport:
    """Collect the current facts of ``view`` into a ``FileReport``.

    Digests that could not be computed are recorded as ``None``.
    """
    info = view.file_info()
    results = view.digests(algorithms)
    return FileReport(
        path=str(view.get_path()),
        size_bytes=info.size_bytes,
        size=view.size_formatted(decimals),
        created=info.created.isoformat() if info.created else None,
        accessed=info.accessed.isoformat(),
        modified=info.modified.isoformat(),
        hidden=view.is_hidden(),
        read_only=view.is_read_only(),
        symlink=view.is_symlink(),
        lock_state=view.lock_state().value,
        file_version=view.get_file_version(),
        product_version=view.get_product_version(),
        digests={algo.value: result.hexdigest for algo, result in results.items()},
    )


class CSVReportWriter:
    def __init__(self, path: Path, algorithms: Iterable[Union[str, HashAlgorithm]] = ()):
        self.path = path
        self.algorithms = [HashAlgorithm.parse(a).value for a in algorithms]
        self.file = path.open('w', newline='', encoding='utf-8')
        self.writer = csv.DictWriter(self.file, fieldnames=BASE_FIELDS + self.algorithms)
        self.writer.writeheader()

    def write_report(self, report: FileReport) -> None:
        record: Dict[str, Any] = {name: getattr(report, name) for name in BASE_FIELDS}
        for name in ('created', 'file_version', 'product_version'):
            record[name] = record[name] or ''
        for algo in self.algorithms:
            record[algo] = report.digests.get(algo) or ''
        self.writer.writerow(record)
        self.file.flush()

    def close(self) -> None:
        self.file.close()

    def __enter__(self) -> 'CSVReportWriter':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class JSONReportWriter:
    def __init__(self, path: Path):
        self.path = path
        self.records: List[Dict[str, Any]] = []

    def add_report(self, report: FileReport) -> None:
        self.records.append(asdict(report))

    def flush(self) -> None:
        with self.path.open('w', encoding='utf-8') as f:
            json.dump(self.records, f, indent=2)
