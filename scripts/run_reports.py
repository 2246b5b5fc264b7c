"""
Run all twenty credit reports.

This script:
1) Loads movie credits from the configured CSV (or the first *.csv found)
2) Builds the relation store and query engine
3) Writes one text report per query into the results directory

Usage:
    python -m scripts.run_reports [--credits PATH] [--results DIR]

Settings can also come from MOVIE_CREDITS_* environment variables.
"""

import argparse  # command-line options
import sys  # exit status
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_credits.config import Settings, setup_logging  # env-driven settings
from movie_credits.data_loader import CreditsLoader, find_credits_file  # data ingestion
from movie_credits.name_lookup import NameLookup  # hints for empty lookups
from movie_credits.query_engine import QueryEngine  # the twenty queries
from movie_credits.reporting import ReportRunner, ReportWriter, default_tasks  # report output


def parse_args(argv=None):
	parser = argparse.ArgumentParser(description="Write the movie credits analysis reports.")
	parser.add_argument('--credits', help="credits CSV file (default: first *.csv in the working directory)")
	parser.add_argument('--results', help="directory the reports are written to")
	return parser.parse_args(argv)


def main(argv=None) -> int:
	args = parse_args(argv)
	settings = Settings()
	setup_logging(settings.log_level, settings.log_file)

	logger.info("=" * 60)
	logger.info("Movie Credits Reports")
	logger.info("=" * 60)

	# 1) Load data; any parse error stops here
	logger.info("[1/3] Loading credits...")
	try:
		credits_path = args.credits or settings.credits_path or find_credits_file(str(Path.cwd()))
		store = CreditsLoader().load_store(str(credits_path))
	except (OSError, ValueError) as e:
		logger.error(f"Could not load credits: {e}")
		return 1

	# 2) Engine
	logger.info("[2/3] Preparing query engine...")
	engine = QueryEngine(store)
	lookup = NameLookup(store, threshold=settings.suggestion_threshold)

	# 3) Reports
	results_dir = args.results or settings.results_dir
	logger.info(f"[3/3] Writing reports to {results_dir}...")
	try:
		writer = ReportWriter(results_dir)  # creates the directory
	except OSError as e:
		logger.error(f"Could not create results directory {results_dir}: {e}")
		return 1
	runner = ReportRunner(writer, lookup=lookup)
	runner.run_all(default_tasks(engine))

	logger.info("All done!")
	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke runner
