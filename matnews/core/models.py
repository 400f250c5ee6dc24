"""Data models for the wrestling team newsletter system."""

from dataclasses import dataclass, field


DEFAULT_COMPETITION_NAME = 'Wrestling Competition'


@dataclass
class TeamConfig:
    """Configuration for the team a competition belongs to."""
    name: str                          # "Central High Wrestling"
    school: str                        # "Central High School"
    primary_color: str = '#3B82F6'     # Header color for the results PDF
    secondary_color: str = '#1E40AF'
    team_store_url: str = ''           # Printed in the PDF footer when set


@dataclass(frozen=True)
class AthleteRecord:
    """One athlete's result at one weight class."""
    name: str
    weight_class: str                  # "152 lbs"
    placement: int | None = None       # 1 for "1st"
    wins: int | None = None
    losses: int | None = None
    pins: int = 0                      # 1 when a pin/fall was mentioned
    takedowns: int = 0                 # never populated by the extractor

    @property
    def key(self) -> tuple:
        return (self.name, self.weight_class)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'weight_class': self.weight_class,
            'placement': self.placement,
            'wins': self.wins,
            'losses': self.losses,
            'pins': self.pins,
            'takedowns': self.takedowns,
        }

    @classmethod
    def from_dict(cls, raw) -> 'AthleteRecord | None':
        """Build a record from a stored dict, or None if it has no usable name."""
        if not isinstance(raw, dict):
            return None
        name = raw.get('name')
        if not isinstance(name, str) or not name.strip():
            return None
        weight_class = raw.get('weight_class')
        if not isinstance(weight_class, str):
            weight_class = ''
        pins = _optional_count(raw.get('pins')) or 0
        return cls(
            name=name.strip(),
            weight_class=weight_class.strip(),
            placement=_optional_count(raw.get('placement'), minimum=1),
            wins=_optional_count(raw.get('wins')),
            losses=_optional_count(raw.get('losses')),
            pins=1 if pins else 0,
            takedowns=_optional_count(raw.get('takedowns')) or 0,
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Structured output of the result extractor for one document.

    ``athletes`` never holds two records with the same (name, weight_class).
    ``raw_lines`` keeps the full split document text so a coach can correct
    misparsed entries by hand.
    """
    competition_name: str
    date: str
    athletes: tuple = ()
    raw_lines: tuple = field(default=(), repr=False)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            'competition_name': self.competition_name,
            'date': self.date,
            'athletes': [a.to_dict() for a in self.athletes],
            'raw_lines': list(self.raw_lines),
        }

    @classmethod
    def from_dict(cls, blob) -> 'ExtractionResult':
        """Validate a persisted blob.

        Every field is treated as optional except ``athletes``, which always
        comes back as a tuple (possibly empty). Entries without a name are
        dropped and duplicate (name, weight_class) pairs are suppressed again.
        """
        if not isinstance(blob, dict):
            blob = {}

        competition_name = blob.get('competition_name')
        if not isinstance(competition_name, str) or not competition_name.strip():
            competition_name = DEFAULT_COMPETITION_NAME
        date = blob.get('date')
        if not isinstance(date, str):
            date = ''

        raw_athletes = blob.get('athletes')
        if not isinstance(raw_athletes, list):
            raw_athletes = []
        athletes = []
        seen = set()
        for raw in raw_athletes:
            record = AthleteRecord.from_dict(raw)
            if record is None or record.key in seen:
                continue
            seen.add(record.key)
            athletes.append(record)

        raw_lines = blob.get('raw_lines')
        if not isinstance(raw_lines, list):
            raw_lines = []

        return cls(
            competition_name=competition_name.strip(),
            date=date.strip(),
            athletes=tuple(athletes),
            raw_lines=tuple(str(line) for line in raw_lines),
        )


def _optional_count(value, minimum: int = 0):
    """Coerce a stored count to int, or None when missing or invalid."""
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return value if value >= minimum else None
    if isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
        return number if number >= minimum else None
    return None
