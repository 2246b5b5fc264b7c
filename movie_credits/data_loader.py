"""
Data loading module.
Parses the movie credits CSV (movie_id, title, cast, crew) into MovieCredit records.
The cast and crew columns each hold a JSON array of objects.
"""

# Standard libs for CSV/JSON parsing, typing, and paths
import csv  # read the credits table
import json  # decode the cast/crew cells
from typing import Dict, List  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes used across the project
from .models import CastAppearance, CrewAppearance, MovieCredit  # structured records
from .relation_store import RelationStore  # immutable snapshot built from the records

# Console logging
from loguru import logger  # console logger


# Cast/crew cells in real credits files are far larger than csv's 128 KiB default
csv.field_size_limit(2**31 - 1)


class CreditsFormatError(ValueError):
	"""A row of the credits file could not be parsed."""

	def __init__(self, line_num: int, reason: str):
		super().__init__(f"line {line_num}: {reason}")
		self.line_num = line_num
		self.reason = reason


class CreditsLoader:
	"""
	Handles loading movie credits from CSV.
	Unlike a best-effort loader, any malformed row stops the load: queries
	must never run over a partially parsed dataset.
	"""

	REQUIRED_COLUMNS = ('movie_id', 'title', 'cast', 'crew')

	def load_credits_from_csv(self, filepath: str) -> List[MovieCredit]:
		"""
		Load every row of the credits CSV.
		Returns a list of MovieCredit objects in file order.
		"""
		movies = []  # accumulator for parsed records
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Credits file not found: {filepath}")

		logger.info(f"[Loader] Loading credits from {filepath}...")  # log action

		with open(filepath, 'r', encoding='utf-8', newline='') as f:
			reader = csv.DictReader(f)
			missing = [c for c in self.REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
			if missing:
				raise CreditsFormatError(1, f"missing columns {missing}")

			# Header is line 1, so data rows start at 2
			for line_num, row in enumerate(reader, 2):
				movies.append(self._parse_row(row, line_num))

		logger.info(f"[Loader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def load_store(self, filepath: str) -> RelationStore:
		"""Load the CSV and freeze it into a RelationStore."""
		return RelationStore(self.load_credits_from_csv(filepath))

	def _parse_row(self, row: Dict[str, str], line_num: int) -> MovieCredit:
		"""Convert one CSV row into a MovieCredit, raising CreditsFormatError on bad data."""
		# DictReader fills cells missing from a short row with None and
		# collects extra cells under the None key
		short = [c for c in self.REQUIRED_COLUMNS if row.get(c) is None]
		if short:
			raise CreditsFormatError(line_num, f"row is missing cells for {short}")
		if row.get(None):
			raise CreditsFormatError(line_num, f"row has {len(row[None])} unexpected extra cell(s)")

		try:
			movie_id = int(row['movie_id'])
		except (TypeError, ValueError):
			raise CreditsFormatError(line_num, f"invalid movie_id {row.get('movie_id')!r}")

		cast = tuple(
			CastAppearance(
				id=self._parse_person_id(entry, line_num),
				name=self._text(entry.get('name')),
				character=self._text(entry.get('character')),
			)
			for entry in self._parse_json_list(row.get('cast'), 'cast', line_num)
		)
		crew = tuple(
			CrewAppearance(
				id=self._parse_person_id(entry, line_num),
				name=self._text(entry.get('name')),
				department=self._text(entry.get('department')),
				job=self._text(entry.get('job')),
			)
			for entry in self._parse_json_list(row.get('crew'), 'crew', line_num)
		)

		return MovieCredit(
			movie_id=movie_id,
			title=self._text(row.get('title')),
			cast=cast,
			crew=crew,
		)

	def _parse_json_list(self, value: str, column: str, line_num: int) -> List[Dict]:
		"""Decode a cast/crew cell; an empty cell means an empty list."""
		if not value.strip():  # empty cell
			return []
		try:
			data = json.loads(value)
		except json.JSONDecodeError as e:
			raise CreditsFormatError(line_num, f"invalid JSON in '{column}': {e}")
		if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
			raise CreditsFormatError(line_num, f"'{column}' must be a JSON array of objects")
		return data

	def _parse_person_id(self, entry: Dict, line_num: int) -> int:
		value = entry.get('id')
		if isinstance(value, bool):
			raise CreditsFormatError(line_num, f"invalid person id {value!r}")
		try:
			return int(value)
		except (TypeError, ValueError):
			raise CreditsFormatError(line_num, f"invalid person id {value!r}")

	def _text(self, value) -> str:
		"""Missing values become empty strings; everything else is kept as stored."""
		if value is None:
			return ''
		return str(value)


def find_credits_file(directory: str) -> Path:
	"""Return the first *.csv file in a directory (by name)."""
	candidates = sorted(Path(directory).glob('*.csv'))
	if not candidates:
		raise FileNotFoundError(f"No .csv credits file found in {directory}")
	logger.debug(f"[Loader] Found {len(candidates)} csv file(s), using {candidates[0].name}")
	return candidates[0]
