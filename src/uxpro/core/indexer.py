"""
Document Indexer - loads design records and builds the in-memory BM25 indexes

Records come from a ``RecordSupply``; the CSV-backed supply reads the data
directory layout:

    <data_dir>/<domain>.csv
    <data_dir>/stacks/<stack>.csv
    <data_dir>/platforms/<platform>.csv
"""

import csv
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from .bm25 import BM25Index, Document
from .domains import DOMAIN_SPECS, PLATFORM_FIELDS, STACK_FIELDS, DomainSpec, make_documents
from .error_handling import (
    DataLoadError,
    IndexingError,
    handle_error,
    log_debug,
    log_info,
    log_success,
    log_warning,
)
from .search import SearchContext
from .settings import DEFAULT_RANKING, RankingConfig
from .signatures import AVAILABLE_PLATFORMS, AVAILABLE_STACKS

Record = Dict[str, str]


class RecordSupply(ABC):
    """Source of flat string-keyed records for every domain, stack and platform."""

    @abstractmethod
    def domain_records(self, spec: DomainSpec) -> List[Record]:
        """Records of one design domain, in file order."""

    @abstractmethod
    def stack_records(self, stack: str) -> List[Record]:
        """Guideline records of one framework stack."""

    @abstractmethod
    def platform_records(self, platform: str) -> List[Record]:
        """Guideline records of one mobile platform."""


class CsvRecordSupply(RecordSupply):
    """Reads records from CSV files under ``data_dir``."""

    def __init__(self, data_dir: Path, encoding: str = "utf-8"):
        self.data_dir = Path(data_dir)
        self.encoding = encoding

    def _read(self, path: Path, required: bool = True) -> List[Record]:
        if not path.exists():
            # most stacks and platforms ship without a guideline file
            if required:
                log_warning("Data file not found", file_path=str(path))
            else:
                log_debug("Optional data file not found", file_path=str(path))
            return []

        records: List[Record] = []
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                reader = csv.reader(f)
                header = next(reader, None)
                if header is None:
                    return []
                columns = [name.strip() for name in header]
                for row in reader:
                    if not any(cell.strip() for cell in row):
                        continue
                    records.append(
                        {
                            column: (row[i].strip() if i < len(row) else "")
                            for i, column in enumerate(columns)
                            if column
                        }
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DataLoadError(f"Cannot read {path}: {e}")
        return records

    def domain_records(self, spec: DomainSpec) -> List[Record]:
        return self._read(self.data_dir / spec.filename)

    def stack_records(self, stack: str) -> List[Record]:
        return self._read(self.data_dir / "stacks" / f"{stack}.csv", required=False)

    def platform_records(self, platform: str) -> List[Record]:
        return self._read(self.data_dir / "platforms" / f"{platform}.csv", required=False)


class InMemoryRecordSupply(RecordSupply):
    """Serves records held in memory, keyed by domain name (``styles``, ``colors``, ...)."""

    def __init__(
        self,
        domains: Optional[Mapping[str, Sequence[Mapping[str, str]]]] = None,
        stacks: Optional[Mapping[str, Sequence[Mapping[str, str]]]] = None,
        platforms: Optional[Mapping[str, Sequence[Mapping[str, str]]]] = None,
    ):
        self._domains = dict(domains or {})
        self._stacks = dict(stacks or {})
        self._platforms = dict(platforms or {})

    def domain_records(self, spec: DomainSpec) -> List[Record]:
        return [dict(r) for r in self._domains.get(spec.name, ())]

    def stack_records(self, stack: str) -> List[Record]:
        return [dict(r) for r in self._stacks.get(stack, ())]

    def platform_records(self, platform: str) -> List[Record]:
        return [dict(r) for r in self._platforms.get(platform, ())]


def _safe_load(loader, key, context: str) -> List[Record]:
    """Load records, degrading an unreadable file to an absent index."""
    try:
        return loader(key)
    except DataLoadError as e:
        handle_error(e, context)
        return []


def _build_optional(documents: List[Document]) -> Optional[BM25Index]:
    # zero documents means the index is absent, never an empty index
    return BM25Index(documents) if documents else None


def build_search_context(
    supply: RecordSupply,
    config: RankingConfig = DEFAULT_RANKING,
    stacks: Sequence[str] = AVAILABLE_STACKS,
    platforms: Sequence[str] = AVAILABLE_PLATFORMS,
) -> SearchContext:
    """
    Load every domain, stack and platform and build their BM25 indexes.

    Domains without records are left out of the context; searching them
    reports the index as not initialized. The unified index covers every
    loaded document.

    Raises:
        IndexingError: When no records were loaded at all
    """
    start_time = time.time()
    log_info("Building search indexes", operation="index_build")

    indexes: Dict[str, BM25Index] = {}
    counts: Dict[str, int] = {}
    all_documents: List[Document] = []

    for spec in DOMAIN_SPECS:
        records = _safe_load(supply.domain_records, spec, f"Loading {spec.name}")
        counts[spec.name] = len(records)
        documents = make_documents(records, spec.doc_type, spec.fields, spec.doc_type)
        index = _build_optional(documents)
        if index is not None:
            indexes[spec.name] = index
            all_documents.extend(documents)

    stack_indexes: Dict[str, BM25Index] = {}
    stack_counts: Dict[str, int] = {}
    for stack in stacks:
        records = _safe_load(supply.stack_records, stack, f"Loading stack {stack}")
        if not records:
            continue
        documents = make_documents(
            records, "stack", STACK_FIELDS, f"stack-{stack}", extra={"stack_name": stack}
        )
        stack_indexes[stack] = BM25Index(documents)
        stack_counts[stack] = len(records)
        all_documents.extend(documents)

    platform_indexes: Dict[str, BM25Index] = {}
    platform_counts: Dict[str, int] = {}
    for platform in platforms:
        records = _safe_load(supply.platform_records, platform, f"Loading platform {platform}")
        if not records:
            continue
        documents = make_documents(
            records, "platform", PLATFORM_FIELDS, f"platform-{platform}",
            extra={"platform_name": platform},
        )
        platform_indexes[platform] = BM25Index(documents)
        platform_counts[platform] = len(records)
        all_documents.extend(documents)

    if not all_documents:
        raise IndexingError("No design records could be loaded; refusing to serve searches")

    context = SearchContext(
        indexes=MappingProxyType(indexes),
        stack_indexes=MappingProxyType(stack_indexes),
        platform_indexes=MappingProxyType(platform_indexes),
        unified=BM25Index(all_documents),
        record_counts=MappingProxyType(counts),
        stack_counts=MappingProxyType(stack_counts),
        platform_counts=MappingProxyType(platform_counts),
        config=config,
    )

    log_success(
        "Search indexes ready",
        documents=len(all_documents),
        domains=len(indexes),
        stacks=len(stack_indexes),
        platforms=len(platform_indexes),
        build_time=round(time.time() - start_time, 3),
    )
    return context


def build_from_data_dir(data_dir: Path, config: RankingConfig = DEFAULT_RANKING) -> SearchContext:
    """Build a context from the CSV files in ``data_dir``."""
    return build_search_context(CsvRecordSupply(data_dir), config)


@dataclass
class FileReport:
    """Validation outcome for one CSV file."""

    file: str
    rows: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _validate_file(path: Path, root: Path) -> FileReport:
    report = FileReport(file=str(path.relative_to(root)))
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                report.errors.append("File is empty")
                return report
            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                report.rows += 1
                if len(row) != len(header):
                    report.errors.append(
                        f"Row {reader.line_num}: expected {len(header)} fields, found {len(row)}"
                    )
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        report.errors.append(str(e))
    return report


def validate_data_dir(data_dir: Path) -> List[FileReport]:
    """
    Check every CSV file in the data directory and its stacks/ and platforms/
    subdirectories for rows whose field count differs from the header.

    Raises:
        DataLoadError: When ``data_dir`` does not exist or holds no CSV files
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise DataLoadError(f"Data directory not found: {data_dir}")

    files = sorted(data_dir.glob("*.csv"))
    for sub in ("stacks", "platforms"):
        files.extend(sorted((data_dir / sub).glob("*.csv")))
    if not files:
        raise DataLoadError(f"No CSV files found in {data_dir}")

    return [_validate_file(path, data_dir) for path in files]
