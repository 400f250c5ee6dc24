"""Best-effort extraction of wrestling results from document text.

Tournament result sheets vary wildly in layout, so this favors recall over
precision and always returns a structured result. Two passes:
  - Weight-anchored: a weight marker line ("152 lbs") opens a lookahead window
    in which every line with a "Firstname Lastname" yields an athlete, with
    placement, win-loss record and pin flag picked up when present.
  - Fallback (only if the first pass found nobody): any line with a name and a
    standalone 1-3 digit number yields a bare athlete at "<number> lbs".

Overlapping windows (two weight markers within the lookahead) are not
disambiguated: a later athlete can land under the earlier weight class.
"""

import datetime
import re

from .models import AthleteRecord, ExtractionResult, DEFAULT_COMPETITION_NAME


DATE_SCAN_LINES = 10
WINDOW_SIZE = 10  # counts the weight marker line itself

DATE_RE = re.compile(r'\d{1,2}/\d{1,2}/\d{2,4}|\d{1,2}-\d{1,2}-\d{2,4}')
WEIGHT_RE = re.compile(r'(\d{1,3})\s*lbs?', re.IGNORECASE)
NAME_RE = re.compile(r'([A-Z][a-z]+\s+[A-Z][a-z]+)')
PLACEMENT_RE = re.compile(r'(\d+)(st|nd|rd|th)')
RECORD_RE = re.compile(r'(\d+)-(\d+)')
PIN_RE = re.compile(r'pin|fall', re.IGNORECASE)
NUMBER_RE = re.compile(r'\b(\d{1,3})\b')


def split_lines(document_text: str) -> list[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in document_text.splitlines() if line.strip()]


def extract(document_text: str) -> ExtractionResult:
    """Extract competition name, date and athlete records from document text.

    Never raises for malformed or empty input; the worst case is an empty
    athlete list with the default name and today's date.
    """
    lines = split_lines(document_text or '')

    competition_name = lines[0] if lines else DEFAULT_COMPETITION_NAME
    date = _find_date(lines) or datetime.date.today().isoformat()

    athletes = _weight_anchored_pass(lines)
    if not athletes:
        athletes = _fallback_pass(lines)

    return ExtractionResult(
        competition_name=competition_name,
        date=date,
        athletes=tuple(athletes),
        raw_lines=tuple(lines),
    )


def _find_date(lines: list[str]) -> str | None:
    for line in lines[:DATE_SCAN_LINES]:
        match = DATE_RE.search(line)
        if match:
            return match.group(0)
    return None


def _weight_anchored_pass(lines: list[str]) -> list[AthleteRecord]:
    athletes = []
    seen = set()

    for i, line in enumerate(lines):
        weight_match = WEIGHT_RE.search(line)
        if not weight_match:
            continue
        weight_class = f'{weight_match.group(1)} lbs'

        for result_line in lines[i + 1:i + WINDOW_SIZE]:
            record = _parse_result_line(result_line, weight_class)
            if record is None or record.key in seen:
                continue
            seen.add(record.key)
            athletes.append(record)

    return athletes


def _parse_result_line(line: str, weight_class: str) -> AthleteRecord | None:
    """Match each sub-pattern independently; all are attributed to one athlete."""
    name_match = NAME_RE.search(line)
    if not name_match:
        return None

    placement_match = PLACEMENT_RE.search(line)
    record_match = RECORD_RE.search(line)
    pin_match = PIN_RE.search(line)

    placement = int(placement_match.group(1)) if placement_match else None
    if placement is not None and placement < 1:
        placement = None

    return AthleteRecord(
        name=name_match.group(1),
        weight_class=weight_class,
        placement=placement,
        wins=int(record_match.group(1)) if record_match else None,
        losses=int(record_match.group(2)) if record_match else None,
        pins=1 if pin_match else 0,
    )


def _fallback_pass(lines: list[str]) -> list[AthleteRecord]:
    athletes = []
    seen = set()

    for line in lines:
        name_match = NAME_RE.search(line)
        number_match = NUMBER_RE.search(line)
        if not (name_match and number_match):
            continue
        record = AthleteRecord(
            name=name_match.group(1),
            weight_class=f'{number_match.group(1)} lbs',
        )
        if record.key in seen:
            continue
        seen.add(record.key)
        athletes.append(record)

    return athletes
