"""
Relation store.
Holds the immutable, in-memory snapshot of movie credits that every query reads.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from .models import MovieCredit


DIRECTOR_JOB = "Director"


class DuplicateMovieError(ValueError):
	"""Raised when two records share a movie id."""


class RelationStore:
	"""
	Read-only ordered collection of MovieCredit records.
	Built once; there is no way to add, replace or remove movies afterwards.
	"""

	def __init__(self, movies: Iterable[MovieCredit] = ()):
		self._movies: Tuple[MovieCredit, ...] = tuple(movies)

		seen = set()
		for movie in self._movies:
			if movie.movie_id in seen:
				raise DuplicateMovieError(f"Duplicate movie id {movie.movie_id} ({movie.title!r})")
			seen.add(movie.movie_id)

		logger.info(f"[Store] Relation store ready with {len(self._movies)} movies")

	def __iter__(self) -> Iterator[MovieCredit]:
		return iter(self._movies)

	def __len__(self) -> int:
		return len(self._movies)

	def find_by_title(self, title: str) -> Optional[MovieCredit]:
		"""Return the first movie with exactly this title, or None."""
		for movie in self._movies:
			if movie.title == title:
				return movie
		return None

	def get_all_actors(self) -> List[str]:
		"""Return a sorted list of all unique cast names in the dataset."""
		return sorted({c.name for m in self._movies for c in m.cast})

	def get_all_crew(self) -> List[str]:
		"""Return a sorted list of all unique crew names in the dataset."""
		return sorted({c.name for m in self._movies for c in m.crew})

	def get_all_directors(self) -> List[str]:
		"""Return a sorted list of all unique director names in the dataset."""
		return sorted({c.name for m in self._movies for c in m.crew if c.job == DIRECTOR_JOB})

	def get_all_titles(self) -> List[str]:
		return sorted({m.title for m in self._movies})
