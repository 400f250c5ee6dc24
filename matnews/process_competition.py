#!/usr/bin/env python3
"""CLI entry point for recording a wrestling competition.

Usage:
    python -m matnews.process_competition --data regional_duals.pdf \\
        --team "Central High Wrestling" --school "Central High School" \\
        --roster roster.json --output ./output/
"""

import argparse
import os
import re
import sys

from matnews.core.models import TeamConfig
from matnews.core.errors import DocumentReadError
from matnews.core.db_builder import store_competition, get_team_season_record
from matnews.core.output_generator import generate_results_summary, generate_season_csv
from matnews.core.pdf_generator import generate_results_pdf
from matnews.core.roster_matcher import load_roster, match_roster, print_roster_report
from matnews.adapters.pdf_adapter import PdfAdapter, cleanup_file
from matnews.adapters.text_adapter import TextAdapter


def _slug(text: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '_', text.lower()).strip('_')
    return slug or 'competition'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Record a wrestling competition')
    parser.add_argument('--data', nargs='+', required=True,
                        help='Results document(s), one competition each')
    parser.add_argument('--source', default='pdf', choices=['pdf', 'text'],
                        help='Document type (default: pdf)')
    parser.add_argument('--team', required=True, help='Team name')
    parser.add_argument('--school', required=True, help='School name')
    parser.add_argument('--output', required=True,
                        help='Output directory for generated files')
    parser.add_argument('--db', default=None,
                        help='Path to the season SQLite database '
                             '(default: {output}/season.db)')
    parser.add_argument('--name', default=None,
                        help='Competition name (default: first line of the document)')
    parser.add_argument('--date', default=None,
                        help='Competition date (default: date found in the document)')
    parser.add_argument('--roster', default=None,
                        help='Path to a JSON roster for name matching')
    parser.add_argument('--primary-color', default='#3B82F6',
                        help='Team primary color for the results PDF')
    parser.add_argument('--store-url', default='',
                        help='Team store URL printed in the PDF footer')
    parser.add_argument('--cleanup', action='store_true',
                        help='Delete each document after it has been processed')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = TeamConfig(
        name=args.team,
        school=args.school,
        primary_color=args.primary_color,
        team_store_url=args.store_url,
    )

    adapter = PdfAdapter() if args.source == 'pdf' else TextAdapter()
    roster = load_roster(args.roster) if args.roster else []

    os.makedirs(args.output, exist_ok=True)
    db_path = args.db if args.db else os.path.join(args.output, 'season.db')
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

    stored = []
    for data_path in args.data:
        print(f"Parsing {data_path}...")
        try:
            result = adapter.parse(data_path)
        except DocumentReadError as e:
            print(f"Error: {e}")
            if stored:
                print(f"Already stored before the error: {', '.join(stored)}")
            sys.exit(1)

        if result.athletes:
            print(f"  -> {len(result.athletes)} athletes from "
                  f"{result.competition_name} ({result.date})")
        else:
            print("  -> No athlete data could be extracted; "
                  "raw text kept for manual entry")

        roster_names = {}
        if roster:
            report = match_roster(result.athletes, roster)
            print_roster_report(report)
            roster_names = report['matched']

        competition_id = store_competition(
            db_path, config, result,
            name=args.name, date=args.date,
            source_path=os.path.abspath(data_path),
            roster_names=roster_names,
        )
        print(f"Stored competition {competition_id} in {db_path}")
        stored.append(f'{data_path} (competition {competition_id})')

        base = f'{competition_id:03d}_{_slug(args.name or result.competition_name)}'
        summary_path = os.path.join(args.output, f'{base}_results.md')
        generate_results_summary(db_path, competition_id, summary_path)
        print(f"Generated {summary_path}")

        pdf_path = os.path.join(args.output, f'{base}_results.pdf')
        generate_results_pdf(db_path, competition_id, pdf_path, config)
        print(f"Generated {pdf_path}")

        if args.cleanup:
            cleanup_file(data_path)

    csv_path = os.path.join(args.output, 'season_stats.csv')
    generate_season_csv(db_path, config.name, csv_path)
    print(f"Generated {csv_path}")
    print(f"Season record: {get_team_season_record(db_path, config.name)}")

    print("\nDone!")


if __name__ == '__main__':
    main()
