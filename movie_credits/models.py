"""
Data models for the movie credits analytics.
Defines the credit records held by the relation store and the named result
records returned by the query engine.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Tuple  # fixed, immutable sequences


@dataclass(frozen=True)
class CastAppearance:
	"""A person playing a character in one movie."""
	id: int  # person id, shared with the person's crew appearances
	name: str  # display name (not unique across ids)
	character: str  # free-text role name, first word is the archetype


@dataclass(frozen=True)
class CrewAppearance:
	"""A person holding a job in a department for one movie."""
	id: int  # person id
	name: str  # display name
	department: str  # may be empty
	job: str  # e.g. "Director", "Original Music Composer", "Co-Producer"


@dataclass(frozen=True)
class MovieCredit:
	"""
	A movie together with the cast and crew it owns.
	Cast and crew keep the order they had in the source row.
	"""
	movie_id: int  # unique movie identifier
	title: str  # display title (not unique)
	cast: Tuple[CastAppearance, ...] = ()
	crew: Tuple[CrewAppearance, ...] = ()


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MovieCastSize:
	title: str
	cast_count: int


@dataclass(frozen=True)
class ActorMovieCount:
	actor: str
	movie_count: int


@dataclass(frozen=True)
class CollaboratorCount:
	crew_member: str
	movie_count: int


@dataclass(frozen=True, order=True)
class PairKey:
	"""Unordered actor pair, always stored with id1 < id2."""
	id1: int
	id2: int


@dataclass(frozen=True)
class ScreenDuo:
	actor1: str
	actor2: str
	count: int


@dataclass(frozen=True)
class CrewDiversity:
	name: str
	unique_departments: int


@dataclass(frozen=True)
class TeamworkStat:
	director: str
	avg_cast: float
	avg_crew: float


@dataclass(frozen=True)
class CareerPath:
	name: str
	most_frequent_department: str
	count: int


@dataclass
class DepartmentStat:
	"""Accumulator: the cast size of every movie a department has a crew row in."""
	name: str
	movie_cast_counts: list

	def average(self) -> float:
		return sum(self.movie_cast_counts) / len(self.movie_cast_counts)


@dataclass(frozen=True)
class DepartmentInfluence:
	department: str
	avg_cast_size: float


@dataclass(frozen=True)
class ArchetypeCount:
	archetype: str
	count: int
