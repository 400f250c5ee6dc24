"""One-page-per-section results PDF for the team newsletter.

Layout:
- Team header band in the team's primary color with white team/school text
- Competition name and date line
- Red-ruled weight class dividers with the athletes listed beneath
- Footer with the team store URL when configured
Sections that do not fit continue on a new page.
"""

import fitz  # PyMuPDF

from .db_builder import get_competition, load_parsed_data
from .models import TeamConfig
from .output_generator import NO_DATA_MESSAGE, format_athlete_line, group_by_weight_class

# --- Page layout constants (letter: 612 x 792 pt) ---
PAGE_W = 612
PAGE_H = 792
LEFT_MARGIN = 54
RIGHT_MARGIN = PAGE_W - 54

HEADER_H = 70
TEAM_NAME_Y = 34
SCHOOL_Y = 54
COMPETITION_Y = 100
DATE_Y = 118
BODY_START_Y = 150
FOOTER_Y = PAGE_H - 24
BODY_BOTTOM_Y = PAGE_H - 48

# Font sizes
TEAM_NAME_SIZE = 20
SCHOOL_SIZE = 11
COMPETITION_SIZE = 15
DATE_SIZE = 10
WEIGHT_SIZE = 11
ATHLETE_SIZE = 10
FOOTER_SIZE = 8

LINE_HEIGHT = ATHLETE_SIZE * 1.5
SECTION_GAP = 8

# Colors
RED = (0.8, 0, 0)
WHITE = (1, 1, 1)
BLACK = (0, 0, 0)
GRAY = (0.4, 0.4, 0.4)
DEFAULT_PRIMARY = (0x3B / 255, 0x82 / 255, 0xF6 / 255)  # #3B82F6

FONT_REGULAR = 'Times-Roman'
FONT_BOLD = 'Times-Bold'
FONT_ITALIC = 'Times-Italic'


def generate_results_pdf(db_path: str, competition_id: int, output_path: str,
                         config: TeamConfig):
    """Generate the results PDF for one competition.

    Args:
        db_path: Path to SQLite database.
        competition_id: Competition to render.
        output_path: Where to save the PDF.
        config: Team name, school, colors and store URL for the header/footer.
    """
    competition = get_competition(db_path, competition_id)
    result = load_parsed_data(db_path, competition_id)

    doc = fitz.open()
    page = _new_page(doc, config, competition['name'], competition['date'])
    y = BODY_START_Y

    if not result.athletes:
        page.insert_text(fitz.Point(LEFT_MARGIN, y), NO_DATA_MESSAGE,
                         fontname=FONT_ITALIC, fontsize=ATHLETE_SIZE, color=GRAY)
    else:
        for weight_class, athletes in group_by_weight_class(result.athletes):
            # Keep the divider with at least one athlete line
            if y + WEIGHT_SIZE + LINE_HEIGHT > BODY_BOTTOM_Y:
                page = _new_page(doc, config, competition['name'], competition['date'])
                y = BODY_START_Y

            _draw_weight_divider(page, y, weight_class or 'Unknown weight')
            y += WEIGHT_SIZE + SECTION_GAP

            for athlete in athletes:
                if y > BODY_BOTTOM_Y:
                    page = _new_page(doc, config, competition['name'],
                                     competition['date'])
                    y = BODY_START_Y
                page.insert_text(fitz.Point(LEFT_MARGIN + 12, y),
                                 format_athlete_line(athlete),
                                 fontname=FONT_REGULAR, fontsize=ATHLETE_SIZE,
                                 color=BLACK)
                y += LINE_HEIGHT

            y += SECTION_GAP

    doc.save(output_path)
    doc.close()


def hex_to_rgb(color: str) -> tuple:
    """Convert "#3B82F6" to a (r, g, b) tuple of 0-1 floats."""
    value = (color or '').strip().lstrip('#')
    if len(value) != 6:
        return DEFAULT_PRIMARY
    try:
        return tuple(int(value[i:i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return DEFAULT_PRIMARY


def _new_page(doc, config: TeamConfig, competition_name: str, date: str):
    """Add a page with header band, competition line and footer."""
    page = doc.new_page(width=PAGE_W, height=PAGE_H)
    primary = hex_to_rgb(config.primary_color)

    page.draw_rect(fitz.Rect(0, 0, PAGE_W, HEADER_H), color=primary, fill=primary)
    _draw_centered(page, TEAM_NAME_Y, config.name, FONT_BOLD, TEAM_NAME_SIZE, WHITE)
    _draw_centered(page, SCHOOL_Y, config.school, FONT_REGULAR, SCHOOL_SIZE, WHITE)

    _draw_centered(page, COMPETITION_Y, competition_name, FONT_BOLD,
                   COMPETITION_SIZE, BLACK)
    if date:
        _draw_centered(page, DATE_Y, date, FONT_ITALIC, DATE_SIZE, GRAY)

    if config.team_store_url:
        _draw_centered(page, FOOTER_Y, f'Team Store: {config.team_store_url}',
                       FONT_REGULAR, FOOTER_SIZE, GRAY)
    return page


def _draw_centered(page, y, text, fontname, fontsize, color):
    tw = fitz.get_text_length(text, fontname=fontname, fontsize=fontsize)
    page.insert_text(fitz.Point(PAGE_W / 2 - tw / 2, y), text,
                     fontname=fontname, fontsize=fontsize, color=color)


def _draw_weight_divider(page, y, weight_class):
    """Draw the weight class label followed by a red rule to the right margin."""
    label = weight_class.upper()
    tw = fitz.get_text_length(label, fontname=FONT_BOLD, fontsize=WEIGHT_SIZE)
    page.insert_text(fitz.Point(LEFT_MARGIN, y), label,
                     fontname=FONT_BOLD, fontsize=WEIGHT_SIZE, color=RED)

    line_y = y - WEIGHT_SIZE * 0.35
    page.draw_line(fitz.Point(LEFT_MARGIN + tw + 8, line_y),
                   fitz.Point(RIGHT_MARGIN, line_y),
                   color=RED, width=0.75)
