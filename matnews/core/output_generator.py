"""Newsletter outputs from the competitions database.

Generates two output types:
  - Results summary markdown for one competition (grouped by weight class)
  - Season statistics CSV for a team
"""

import csv
import re
import sqlite3

from .db_builder import get_competition, load_parsed_data


NO_DATA_MESSAGE = 'No athlete data could be extracted.'


def ordinal(n: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th"."""
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f'{n}{suffix}'


def weight_sort_key(weight_class: str) -> tuple:
    """Sort "106 lbs" before "152 lbs"; non-numeric classes go last."""
    match = re.match(r'\s*(\d+)', weight_class or '')
    if match:
        return (0, int(match.group(1)), weight_class)
    return (1, 0, weight_class or '')


def format_athlete_line(athlete) -> str:
    """Render one athlete as "John Smith - 1st, 5-2, pin"."""
    details = []
    if athlete.placement is not None:
        details.append(ordinal(athlete.placement))
    if athlete.wins is not None and athlete.losses is not None:
        details.append(f'{athlete.wins}-{athlete.losses}')
    if athlete.pins:
        details.append('pin')
    if details:
        return f'{athlete.name} - {", ".join(details)}'
    return athlete.name


def group_by_weight_class(athletes) -> list[tuple]:
    """Return [(weight_class, [athletes])] in ascending weight order."""
    groups: dict[str, list] = {}
    for a in athletes:
        groups.setdefault(a.weight_class, []).append(a)
    return [(wc, groups[wc]) for wc in sorted(groups, key=weight_sort_key)]


def generate_results_summary(db_path: str, competition_id: int, output_path: str):
    """Generate the results summary markdown for one competition.

    When nothing could be extracted the raw document lines are written out
    instead, so the coach can enter results by hand.
    """
    competition = get_competition(db_path, competition_id)
    result = load_parsed_data(db_path, competition_id)

    lines = [f'# {competition["name"]}', '']
    if competition['date']:
        lines.append(f'Date: {competition["date"]}')
        lines.append('')

    if not result.athletes:
        lines.append(NO_DATA_MESSAGE)
        if result.raw_lines:
            lines.append('')
            lines.append('## Raw text')
            lines.append('')
            lines.extend(result.raw_lines)
    else:
        for weight_class, athletes in group_by_weight_class(result.athletes):
            lines.append(f'## {weight_class or "Unknown weight"}')
            lines.append('')
            for a in athletes:
                lines.append(format_athlete_line(a))
            lines.append('')

    with open(output_path, 'w') as f:
        f.write('\n'.join(lines).rstrip('\n') + '\n')


def generate_season_csv(db_path: str, team_name: str, output_path: str):
    """Generate a team's season statistics CSV.

    One row per athlete (roster name when matched), sorted by wins desc,
    then name.
    """
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()

    cur.execute('''SELECT COALESCE(p.roster_name, p.name) AS athlete,
                          p.weight_class, p.competition_id,
                          p.wins, p.losses, p.pins
                   FROM athlete_performances p
                   JOIN competitions c ON p.competition_id = c.id
                   WHERE c.team_name = ?
                   ORDER BY p.id''', (team_name,))
    performances = cur.fetchall()
    conn.close()

    stats: dict[str, dict] = {}
    for athlete, weight_class, competition_id, wins, losses, pins in performances:
        row = stats.setdefault(athlete, {
            'name': athlete,
            'weight_classes': [],
            'competitions': set(),
            'wins': 0,
            'losses': 0,
            'pins': 0,
        })
        if weight_class and weight_class not in row['weight_classes']:
            row['weight_classes'].append(weight_class)
        row['competitions'].add(competition_id)
        row['wins'] += wins or 0
        row['losses'] += losses or 0
        row['pins'] += pins or 0

    rows = sorted(stats.values(), key=lambda r: (-r['wins'], r['name']))

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=['name', 'weight classes',
                                               'competitions', 'wins',
                                               'losses', 'pins'])
        writer.writeheader()
        for row in rows:
            writer.writerow({
                'name': row['name'],
                'weight classes': '; '.join(sorted(row['weight_classes'],
                                                   key=weight_sort_key)),
                'competitions': len(row['competitions']),
                'wins': row['wins'],
                'losses': row['losses'],
                'pins': row['pins'],
            })
