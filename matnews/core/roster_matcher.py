"""Match extracted athlete names against the team roster.

Two-phase matching:
  Phase 1: Exact, case-insensitive, whitespace-collapsed comparison
  Phase 2: Fuzzy candidates (informational, not auto-applied)

The extraction result itself is never changed; matched roster names are only
recorded alongside the stored performances.
"""

import json
import re
from difflib import SequenceMatcher


FUZZY_THRESHOLD = 0.80


def _match_key(name: str) -> str:
    """Lowercase, hyphens as spaces, whitespace collapsed."""
    key = name.strip().lower().replace('-', ' ')
    return re.sub(r'\s+', ' ', key)


def load_roster(roster_path: str) -> list[dict]:
    """Load a roster JSON file.

    Accepts a list of objects (name, grade, weight_class) or a list of plain
    name strings. A missing or invalid file yields an empty roster.
    """
    try:
        with open(roster_path, 'r') as f:
            raw = json.load(f)
    except FileNotFoundError:
        print(f"Warning: Roster file not found: {roster_path}")
        return []
    except json.JSONDecodeError as e:
        print(f"Warning: Invalid JSON in roster file: {e}")
        return []

    if isinstance(raw, dict):
        raw = raw.get('athletes', [])
    if not isinstance(raw, list):
        print(f"Warning: Roster file has no athlete list: {roster_path}")
        return []

    roster = []
    for entry in raw:
        if isinstance(entry, str):
            entry = {'name': entry}
        name = entry.get('name') if isinstance(entry, dict) else None
        if not isinstance(name, str) or not name.strip():
            continue
        roster.append({
            'name': name.strip(),
            'grade': str(entry.get('grade', '') or ''),
            'weight_class': str(entry.get('weight_class', '') or ''),
        })
    return roster


def match_roster(athletes, roster: list[dict]) -> dict:
    """Match extracted athletes to roster entries.

    Args:
        athletes: AthleteRecords from an extraction result.
        roster: Entries from load_roster().

    Returns:
        Dict with:
          matched: {extracted name: roster name}
          unmatched: extracted names with no exact roster match, sorted
          potential_matches: [(extracted name, roster name, ratio)] for review
    """
    roster_by_key = {}
    for entry in roster:
        roster_by_key.setdefault(_match_key(entry['name']), entry['name'])

    matched = {}
    unmatched = []
    for name in sorted({a.name for a in athletes}):
        roster_name = roster_by_key.get(_match_key(name))
        if roster_name:
            matched[name] = roster_name
        else:
            unmatched.append(name)

    # Fuzzy candidates only for names left unmatched
    matched_roster = set(matched.values())
    potential_matches = []
    for name in unmatched:
        for roster_name in roster_by_key.values():
            if roster_name in matched_roster:
                continue
            ratio = SequenceMatcher(None, _match_key(name),
                                    _match_key(roster_name)).ratio()
            if ratio > FUZZY_THRESHOLD:
                potential_matches.append((name, roster_name, round(ratio, 2)))

    return {
        'matched': matched,
        'unmatched': unmatched,
        'potential_matches': potential_matches,
    }


def print_roster_report(report: dict) -> None:
    """Print a human-readable roster matching report to stdout."""
    matched = report['matched']
    unmatched = report['unmatched']
    candidates = report['potential_matches']

    print(f"\nRoster matching: {len(matched)} matched, "
          f"{len(unmatched)} not on roster, "
          f"{len(candidates)} potential matches to review")

    if unmatched:
        lines = [f'  "{name}"' for name in unmatched]
        if len(lines) > 15:
            print(f"Not on roster (showing 15 of {len(lines)}):")
            print('\n'.join(lines[:15]))
        else:
            print("Not on roster:")
            print('\n'.join(lines))

    if candidates:
        print(f"Potential matches (>{int(FUZZY_THRESHOLD * 100)}% similar):")
        for name, roster_name, ratio in candidates[:15]:
            print(f'  "{name}" / "{roster_name}" ({int(ratio*100)}% similar)')
        if len(candidates) > 15:
            print(f"  ... and {len(candidates) - 15} more")
