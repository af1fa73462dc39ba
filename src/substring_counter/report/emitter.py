"""Report output for Substring Counter.

Turns the final ``path -> count`` mapping into JSON, CSV or a ``rich``
table.  JSON keeps the merge order of the mapping; nothing here sorts.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Mapping

from rich.table import Table
from rich.text import Text

CSV_FIELDS = ('path', 'count')


class ReportError(Exception):
    """Raised when the report cannot be encoded or written."""


def render_json(results: Mapping[str, int], ensure_ascii: bool = False) -> str:
    """Encode ``results`` as a pretty-printed JSON object.

    With ``ensure_ascii`` every non-ASCII character, including the lone
    surrogates that stand in for undecodable filename bytes, is written as
    a ``\\u`` escape.
    """
    try:
        return json.dumps(dict(results), indent=2, ensure_ascii=ensure_ascii)
    except (TypeError, ValueError) as exc:
        raise ReportError(f'cannot encode report: {exc}') from exc


def write_json(results: Mapping[str, int], path: Path) -> None:
    text = render_json(results)
    try:
        with path.open('w', encoding='utf-8', errors='surrogateescape') as f:
            f.write(text)
            f.write('\n')
    except OSError as exc:
        raise ReportError(f'{path}: {exc}') from exc


def write_csv(results: Mapping[str, int], path: Path) -> None:
    """Write one ``path,count`` row per scanned file, with a header row."""
    try:
        with path.open('w', newline='', encoding='utf-8', errors='surrogateescape') as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for file_path, count in results.items():
                writer.writerow({'path': file_path, 'count': count})
    except OSError as exc:
        raise ReportError(f'{path}: {exc}') from exc


def write_report(results: Mapping[str, int], path: Path) -> None:
    """Write ``results`` to ``path``, choosing CSV or JSON by suffix."""
    if path.suffix.lower() == '.csv':
        write_csv(results, path)
    else:
        write_json(results, path)


def display_path(file_path: str) -> str:
    """Make ``file_path`` printable, replacing undecodable bytes with U+FFFD."""
    return file_path.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


def results_table(results: Mapping[str, int], title: str = 'Substring matches') -> Table:
    table = Table(title=title)
    table.add_column('Path')
    table.add_column('Matches', justify='right')
    for file_path, count in results.items():
        table.add_row(Text(display_path(file_path)), str(count))
    return table
