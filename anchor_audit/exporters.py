"""Writers that turn validated opportunities into shareable reports.

Three formats are supported: JSON for machines, a Markdown table for
review threads and a spreadsheet-friendly CSV that spells out where each
hyperlink should be inserted.
"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict
from typing import List, Sequence

from .engine.types import ValidatedOpportunity

CSV_HEADER: List[str] = [
    'id',
    'origin_url',
    'anchor',
    'destination_url',
    'score',
    'instruction',
    'context',
    'implemented',
    'reason',
]


def to_json(opportunities: Sequence[ValidatedOpportunity]) -> str:
    """Return the opportunities as an indented JSON array."""

    return json.dumps([asdict(item) for item in opportunities], indent=2, ensure_ascii=False)


def _cell(value: str) -> str:
    return ' '.join(str(value).replace('|', '\\|').split())


def to_markdown(opportunities: Sequence[ValidatedOpportunity]) -> str:
    """Return a Markdown table with one row per opportunity."""

    lines = [
        '| Origin | Anchor | Kind | Destination | Score | Reason |',
        '|---|---|---|---|---|---|',
    ]
    for item in opportunities:
        lines.append(
            f"| {_cell(item.origin_url)} | {_cell(item.anchor)} | {item.kind} | "
            f"{_cell(item.destination_url)} | {item.score:.2f} | {_cell(item.reason)} |"
        )
    return '\n'.join(lines)


def to_csv(opportunities: Sequence[ValidatedOpportunity]) -> str:
    """Return CSV text prefixed with a UTF-8 BOM so spreadsheets detect the encoding.

    Parameters
    ----------
    opportunities:
        Ranked opportunities, written in the given order.

    Returns
    -------
    str
        The CSV document, header row first. An empty input yields an
        empty string.
    """

    if not opportunities:
        return ''

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for index, item in enumerate(opportunities, start=1):
        instruction = f'Link the anchor "{item.anchor}" in this passage:\n\n{item.context}'
        writer.writerow(
            [
                index,
                item.origin_url,
                item.anchor,
                item.destination_url,
                f'{item.score:.2f}',
                instruction,
                item.context,
                'TRUE',
                item.reason,
            ]
        )
    return '\ufeff' + buffer.getvalue()
