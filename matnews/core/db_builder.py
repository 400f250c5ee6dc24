"""SQLite persistence for competitions and athlete performances.

The database accumulates a season: each processed document adds one row to
``competitions`` (with the extraction result stored verbatim as JSON) and one
row per extracted athlete to ``athlete_performances``.
"""

import datetime
import json
import sqlite3

from .models import ExtractionResult, TeamConfig


DATE_FORMATS = ['%m/%d/%Y', '%m/%d/%y', '%m-%d-%Y', '%m-%d-%y', '%Y-%m-%d']


def init_database(db_path: str) -> str:
    """Create the tables if they do not exist yet. Returns db_path."""
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()

    cur.execute('''CREATE TABLE IF NOT EXISTS competitions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        team_name TEXT,
        school TEXT,
        name TEXT,
        date TEXT,
        date_iso TEXT,
        source_path TEXT,
        parsed_data TEXT,
        created_at TEXT
    )''')

    cur.execute('''CREATE TABLE IF NOT EXISTS athlete_performances (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        competition_id INTEGER REFERENCES competitions(id),
        name TEXT,
        roster_name TEXT,
        weight_class TEXT,
        placement INTEGER,
        wins INTEGER,
        losses INTEGER,
        pins INTEGER,
        takedowns INTEGER
    )''')

    conn.commit()
    conn.close()
    return db_path


def store_competition(db_path: str, config: TeamConfig, result: ExtractionResult,
                      name: str | None = None, date: str | None = None,
                      source_path: str | None = None,
                      roster_names: dict | None = None) -> int:
    """Store an extraction result as a new competition.

    Args:
        db_path: Path to the SQLite database (created if missing).
        config: Team the competition belongs to.
        result: Output of the result extractor.
        name: Display name; defaults to the extracted competition name.
        date: Competition date; defaults to the extracted date.
        source_path: Where the source document was read from.
        roster_names: Optional {extracted name: roster name} from roster matching.

    Returns:
        The new competition id.
    """
    init_database(db_path)
    roster_names = roster_names or {}
    name = name or result.competition_name
    date = date or result.date

    conn = sqlite3.connect(db_path)
    cur = conn.cursor()

    cur.execute('''INSERT INTO competitions
        (team_name, school, name, date, date_iso, source_path, parsed_data, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)''',
        (config.name, config.school, name, date, normalize_date(date),
         source_path, json.dumps(result.to_dict()),
         datetime.datetime.now().isoformat(timespec='seconds')))
    competition_id = cur.lastrowid

    for a in result.athletes:
        cur.execute('''INSERT INTO athlete_performances
            (competition_id, name, roster_name, weight_class, placement,
             wins, losses, pins, takedowns)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)''',
            (competition_id, a.name, roster_names.get(a.name), a.weight_class,
             a.placement, a.wins, a.losses, a.pins, a.takedowns))

    conn.commit()
    conn.close()
    return competition_id


def normalize_date(date: str) -> str | None:
    """Convert a stored date ("3/14/2024", "2024-03-14") to ISO, or None."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(date.strip(), fmt).date().isoformat()
        except (ValueError, AttributeError):
            continue
    return None


def load_parsed_data(db_path: str, competition_id: int) -> ExtractionResult:
    """Load and validate the stored extraction result of a competition.

    Raises KeyError if no competition has that id.
    """
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    cur.execute('SELECT parsed_data FROM competitions WHERE id = ?',
                (competition_id,))
    row = cur.fetchone()
    conn.close()

    if row is None:
        raise KeyError(f"No competition with id {competition_id}")

    try:
        blob = json.loads(row[0]) if row[0] else {}
    except json.JSONDecodeError:
        blob = {}
    return ExtractionResult.from_dict(blob)


def get_competition(db_path: str, competition_id: int) -> dict:
    """Return one competition row as a dict. Raises KeyError if missing."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    cur = conn.cursor()
    cur.execute('''SELECT id, team_name, school, name, date, date_iso, source_path
                   FROM competitions WHERE id = ?''', (competition_id,))
    row = cur.fetchone()
    conn.close()

    if row is None:
        raise KeyError(f"No competition with id {competition_id}")
    return dict(row)


def get_competitions(db_path: str, team_name: str) -> list[dict]:
    """Return a team's competitions, newest first."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    cur = conn.cursor()
    cur.execute('''SELECT id, team_name, school, name, date, date_iso, source_path
                   FROM competitions
                   WHERE team_name = ?
                   ORDER BY date_iso IS NULL, date_iso DESC, id DESC''',
                (team_name,))
    rows = [dict(row) for row in cur.fetchall()]
    conn.close()
    return rows


def get_performances(db_path: str, competition_id: int) -> list[dict]:
    """Return the performance rows stored for a competition, in insert order."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    cur = conn.cursor()
    cur.execute('''SELECT name, roster_name, weight_class, placement,
                          wins, losses, pins, takedowns
                   FROM athlete_performances
                   WHERE competition_id = ?
                   ORDER BY id''', (competition_id,))
    rows = [dict(row) for row in cur.fetchall()]
    conn.close()
    return rows


def get_athlete_season_stats(db_path: str, team_name: str, athlete_name: str) -> dict:
    """Sum wins, losses and pins for one athlete across the team's competitions.

    The athlete is matched by roster name when one was recorded, otherwise by
    the extracted name. Missing values count as 0.
    """
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    cur.execute('''SELECT COALESCE(SUM(p.wins), 0),
                          COALESCE(SUM(p.losses), 0),
                          COALESCE(SUM(p.pins), 0)
                   FROM athlete_performances p
                   JOIN competitions c ON p.competition_id = c.id
                   WHERE c.team_name = ?
                     AND COALESCE(p.roster_name, p.name) = ?''',
                (team_name, athlete_name))
    wins, losses, pins = cur.fetchone()
    conn.close()
    return {'wins': wins, 'losses': losses, 'pins': pins}


def get_team_season_record(db_path: str, team_name: str) -> str:
    """Return the team's summed season record as "W-L"."""
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    cur.execute('''SELECT COALESCE(SUM(p.wins), 0), COALESCE(SUM(p.losses), 0)
                   FROM athlete_performances p
                   JOIN competitions c ON p.competition_id = c.id
                   WHERE c.team_name = ?''', (team_name,))
    wins, losses = cur.fetchone()
    conn.close()
    return f'{wins}-{losses}'
