"""Blame aggregation: per-author line weight across all changed files."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..errors import MissingBlameDataError
from ..models import BlameEntry, ChangedFile

REQUIRED_BLAME_FIELDS = ('login', 'count', 'age')

BlameLookup = Callable[[ChangedFile], Optional[Iterable]]


@dataclass
class BlameAggregate:
    """Aggregated blame of a pull request's files."""
    # login -> summed line count, in order of first appearance
    weights: Dict[str, int] = field(default_factory=dict)
    entries: Dict[str, List[BlameEntry]] = field(default_factory=dict)

    @property
    def distinct_authors(self) -> int:
        return len(self.entries)

    def add(self, entry: BlameEntry) -> None:
        self.weights[entry.login] = self.weights.get(entry.login, 0) + entry.count
        self.entries.setdefault(entry.login, []).append(entry)


def validate_blame_entry(entry) -> BlameEntry:
    """Convert a raw blame range to a BlameEntry.

    Raises:
        MissingBlameDataError: If login, count or age is missing or malformed
    """
    if isinstance(entry, BlameEntry):
        return entry
    if not isinstance(entry, dict) or any(entry.get(key) is None for key in REQUIRED_BLAME_FIELDS):
        raise MissingBlameDataError(f"Missing blame range data: {entry!r}")

    login, count, age = entry['login'], entry['count'], entry['age']
    if not isinstance(login, str) or not login:
        raise MissingBlameDataError(f"Missing blame range data: invalid login {login!r}")
    for value in (count, age):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MissingBlameDataError(f"Missing blame range data: invalid value {value!r} for {login}")
    if count < 0:
        raise MissingBlameDataError(f"Missing blame range data: negative count for {login}")

    return BlameEntry(login=login, count=count, age=age)


class BlameAggregator:
    """Looks up blame for every file concurrently and sums line counts per author."""

    def __init__(self, blame_lookup: BlameLookup, max_workers: int = 10):
        """Initialize the aggregator.

        Args:
            blame_lookup: Callable returning the blame ranges of one file
            max_workers: Upper bound on concurrent lookups
        """
        self.blame_lookup = blame_lookup
        self.max_workers = max_workers

    def _lookup_file(self, file: ChangedFile) -> List[BlameEntry]:
        ranges = self.blame_lookup(file) or []
        entries = [validate_blame_entry(entry) for entry in ranges]
        logging.debug(f"Blame for {file.filename}: {len(entries)} range(s)")
        return entries

    def lookup_all(self, files: List[ChangedFile]) -> List[List[BlameEntry]]:
        """Fetch and validate blame for all files in parallel.

        The first failing lookup cancels the ones not yet started and its
        error is re-raised; no partial result is returned.

        Returns:
            Blame entries per file, in the order of ``files``
        """
        if not files:
            return []

        results: List[Optional[List[BlameEntry]]] = [None] * len(files)
        max_workers = min(self.max_workers, len(files))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(self._lookup_file, file): index
                for index, file in enumerate(files)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logging.error(f"Blame lookup failed for {files[index].filename}: {e}")
                    for pending in future_to_index:
                        pending.cancel()
                    raise

        return results

    def aggregate(self, files: List[ChangedFile]) -> BlameAggregate:
        """Sum blame line counts per author across all files.

        Repeated entries for an author, within or across files, are added up.

        Args:
            files: Files to blame

        Returns:
            BlameAggregate with weights and the raw entries per author
        """
        aggregate = BlameAggregate()
        for entries in self.lookup_all(files):
            for entry in entries:
                aggregate.add(entry)

        logging.debug(f"Aggregated blame of {len(files)} file(s) from {aggregate.distinct_authors} author(s)")
        return aggregate
