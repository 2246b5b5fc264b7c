"""
Query engine module.
Twenty fixed analytical queries over the cast/crew relation.

Every query is a pure function of the relation store and its arguments.
Name lookups use exact, case-sensitive equality. "Top N" queries sort with
Python's stable sort, so ties keep the order in which groups were first seen.
"""

from collections import Counter
from typing import Dict, Iterable, List, Set

from loguru import logger

from .models import (
	ActorMovieCount,
	ArchetypeCount,
	CareerPath,
	CollaboratorCount,
	CrewDiversity,
	DepartmentInfluence,
	DepartmentStat,
	MovieCastSize,
	MovieCredit,
	PairKey,
	ScreenDuo,
	TeamworkStat,
)
from .relation_store import DIRECTOR_JOB, RelationStore


COMPOSER_JOB = "Original Music Composer"
WRITER_JOB_FRAGMENT = "Writer"  # matches "Writer", "Co-Writer", ...
PRODUCER_JOB_FRAGMENT = "Producer"  # matches "Producer", "Executive Producer", ...
UNKNOWN_DIRECTOR = "Unknown"


def _check_top_n(n: int) -> None:
	if isinstance(n, bool) or not isinstance(n, int):
		raise TypeError(f"n must be an int, got {type(n).__name__}")
	if n < 0:
		raise ValueError(f"n must be non-negative, got {n}")


def _distinct(values: Iterable[str]) -> List[str]:
	"""Deduplicate while keeping first-occurrence order."""
	return list(dict.fromkeys(values))


def _has_director(movie: MovieCredit, director: str) -> bool:
	return any(c.job == DIRECTOR_JOB and c.name == director for c in movie.crew)


class QueryEngine:
	"""
	Stateless query capability over a RelationStore.
	Holds only a reference to the store, so one engine may serve any number
	of callers.
	"""

	def __init__(self, store: RelationStore):
		self.store = store

	def _movies_directed_by(self, director: str) -> List[MovieCredit]:
		return [m for m in self.store if _has_director(m, director)]

	# ------------------------------------------------------------------
	# Filters and projections
	# ------------------------------------------------------------------

	def movies_by_director(self, director: str) -> List[str]:
		"""Titles of movies with a "Director" crew row for this name."""
		return [m.title for m in self._movies_directed_by(director)]

	def characters_by_actor(self, actor: str) -> List[str]:
		"""Distinct characters the actor played."""
		return _distinct(c.character for m in self.store for c in m.cast if c.name == actor)

	def unique_crew_departments(self) -> List[str]:
		"""All non-empty crew departments, sorted ascending."""
		return sorted({c.department for m in self.store for c in m.crew if c.department})

	def movies_by_composer(self, composer: str) -> List[str]:
		return [
			m.title for m in self.store
			if any(c.job == COMPOSER_JOB and c.name == composer for c in m.crew)
		]

	def movies_with_duo(self, actor1: str, actor2: str) -> List[str]:
		"""Titles whose cast contains both actors."""
		result = []
		for movie in self.store:
			names = {c.name for c in movie.cast}
			if actor1 in names and actor2 in names:
				result.append(movie.title)
		return result

	def count_crew_in_department(self, department: str) -> int:
		"""Number of distinct people (by id) with a crew row in the department."""
		return len({c.id for m in self.store for c in m.crew if c.department == department})

	def dual_role_people_in_movie(self, title: str) -> List[str]:
		"""
		Names of people who are both cast and crew of the movie.
		Only the first movie with the title is considered; an unknown title
		gives an empty list.
		"""
		movie = self.store.find_by_title(title)
		if movie is None:
			logger.debug(f"[Engine] No movie titled '{title}'")
			return []
		cast_ids = {c.id for c in movie.cast}
		return _distinct(c.name for c in movie.crew if c.id in cast_ids)

	# ------------------------------------------------------------------
	# Grouping and aggregation
	# ------------------------------------------------------------------

	def top_movies_by_cast_size(self, n: int) -> List[MovieCastSize]:
		_check_top_n(n)
		ranked = sorted(self.store, key=lambda m: len(m.cast), reverse=True)
		return [MovieCastSize(title=m.title, cast_count=len(m.cast)) for m in ranked[:n]]

	def top_actors_by_movie_count(self, n: int = 10) -> List[ActorMovieCount]:
		"""
		Actors ranked by number of cast rows.
		Repeated rows for one actor in one movie count separately.
		"""
		_check_top_n(n)
		counts = Counter(c.name for m in self.store for c in m.cast)
		ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
		return [ActorMovieCount(actor=name, movie_count=count) for name, count in ranked[:n]]

	def movie_director_map(self) -> Dict[int, str]:
		"""movie_id -> first Director in the crew list, or "Unknown"."""
		result = {}
		for movie in self.store:
			director = next((c.name for c in movie.crew if c.job == DIRECTOR_JOB), UNKNOWN_DIRECTOR)
			result[movie.movie_id] = director
		return result

	def top_crew_diversity_index(self, n: int) -> List[CrewDiversity]:
		"""Crew names ranked by how many distinct non-empty departments they worked in."""
		_check_top_n(n)
		departments: Dict[str, Set[str]] = {}
		for movie in self.store:
			for c in movie.crew:
				seen = departments.setdefault(c.name, set())
				if c.department:
					seen.add(c.department)
		ranked = sorted(departments.items(), key=lambda kv: len(kv[1]), reverse=True)
		return [CrewDiversity(name=name, unique_departments=len(depts)) for name, depts in ranked[:n]]

	def analyze_teamwork(self) -> List[TeamworkStat]:
		"""
		Average cast and crew size per director, highest average cast first.
		A co-directed movie counts once for each of its directors.
		"""
		directed: Dict[str, List[MovieCredit]] = {}
		for movie in self.store:
			for name in _distinct(c.name for c in movie.crew if c.job == DIRECTOR_JOB):
				directed.setdefault(name, []).append(movie)

		stats = [
			TeamworkStat(
				director=name,
				avg_cast=sum(len(m.cast) for m in movies) / len(movies),
				avg_crew=sum(len(m.crew) for m in movies) / len(movies),
			)
			for name, movies in directed.items()
		]
		stats.sort(key=lambda s: s.avg_cast, reverse=True)
		return stats

	def dual_role_career_path(self) -> List[CareerPath]:
		"""
		For each person id found in both cast and crew anywhere, the department
		with the most crew rows for them. Ties go to the department seen first.
		Crew rows without a department are ignored.
		"""
		cast_ids = {c.id for m in self.store for c in m.cast}

		names: Dict[int, str] = {}
		departments: Dict[int, Counter] = {}
		for movie in self.store:
			for c in movie.crew:
				if c.id not in cast_ids:
					continue
				names.setdefault(c.id, c.name)
				counter = departments.setdefault(c.id, Counter())
				if c.department:
					counter[c.department] += 1

		result = []
		for person_id, counter in departments.items():
			if not counter:
				continue
			# most_common keeps insertion order among equal counts
			department, count = counter.most_common(1)[0]
			result.append(CareerPath(name=names[person_id], most_frequent_department=department, count=count))
		return result

	def analyze_department_influence(self) -> List[DepartmentInfluence]:
		"""
		Average cast size of the movies each department worked on.
		Every crew row is one data point, so a department with five rows in a
		movie weighs that movie five times.
		"""
		stats: Dict[str, DepartmentStat] = {}
		for movie in self.store:
			cast_count = len(movie.cast)
			for c in movie.crew:
				if not c.department:
					continue
				stat = stats.setdefault(c.department, DepartmentStat(name=c.department, movie_cast_counts=[]))
				stat.movie_cast_counts.append(cast_count)

		result = [DepartmentInfluence(department=s.name, avg_cast_size=s.average()) for s in stats.values()]
		result.sort(key=lambda d: d.avg_cast_size, reverse=True)
		return result

	def analyze_character_archetypes(self, actor: str) -> List[ArchetypeCount]:
		"""Group the actor's characters by their first word and count them."""
		counts: Counter = Counter()
		for movie in self.store:
			for c in movie.cast:
				if c.name != actor:
					continue
				# first space-separated token; a leading space gives a blank token
				archetype = c.character.split(' ')[0].strip()
				if archetype:
					counts[archetype] += 1
		ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
		return [ArchetypeCount(archetype=word, count=count) for word, count in ranked]

	# ------------------------------------------------------------------
	# Self-joins and set intersections
	# ------------------------------------------------------------------

	def top_collaborators_with_director(self, director: str, n: int) -> List[CollaboratorCount]:
		"""Crew members ranked by the number of this director's movies they worked on."""
		_check_top_n(n)
		counts: Counter = Counter()
		for movie in self._movies_directed_by(director):
			for name in _distinct(c.name for c in movie.crew if c.name != director):
				counts[name] += 1
		ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
		return [CollaboratorCount(crew_member=name, movie_count=count) for name, count in ranked[:n]]

	def top_screen_duos(self, n: int) -> List[ScreenDuo]:
		"""
		Actor pairs ranked by number of shared movies.
		Pairs come from the cross product of each cast with itself, keeping
		only id1 < id2 so a pair is counted once and nobody pairs with themself.
		"""
		_check_top_n(n)
		counts: Counter = Counter()
		pair_names: Dict[PairKey, tuple] = {}
		for movie in self.store:
			for a in movie.cast:
				for b in movie.cast:
					if a.id >= b.id:
						continue
					key = PairKey(a.id, b.id)
					counts[key] += 1
					pair_names.setdefault(key, (a.name, b.name))

		ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
		return [
			ScreenDuo(actor1=pair_names[key][0], actor2=pair_names[key][1], count=count)
			for key, count in ranked[:n]
		]

	def creative_trios(self) -> List[str]:
		"""
		Titles where one person id is credited as Director (exact job) and with
		jobs containing "Writer" and "Producer" in the same movie.
		"""
		result = []
		for movie in self.store:
			jobs: Dict[int, List[str]] = {}
			for c in movie.crew:
				jobs.setdefault(c.id, []).append(c.job)
			for person_jobs in jobs.values():
				if (DIRECTOR_JOB in person_jobs
						and any(WRITER_JOB_FRAGMENT in j for j in person_jobs)
						and any(PRODUCER_JOB_FRAGMENT in j for j in person_jobs)):
					result.append(movie.title)
					break
		return result

	def collaborators_of_two_directors(self, director1: str, director2: str) -> List[str]:
		"""Crew names that worked with both directors, minus the directors themselves."""
		crew1 = _distinct(c.name for m in self._movies_directed_by(director1) for c in m.crew)
		crew2 = {c.name for m in self._movies_directed_by(director2) for c in m.crew}
		excluded = {director1, director2}
		return [name for name in crew1 if name in crew2 and name not in excluded]

	# ------------------------------------------------------------------
	# Graph reachability
	# ------------------------------------------------------------------

	def two_degrees_of_separation(self, actor: str) -> List[str]:
		"""
		Actors exactly two co-cast hops away from the given actor.

		Level one is everyone sharing a movie with the actor; level two is
		everyone sharing a movie with someone from level one. The result is
		level two without level one and without the actor.
		"""
		first_degree = {
			c.name
			for m in self.store if any(c.name == actor for c in m.cast)
			for c in m.cast
			if c.name != actor
		}
		if not first_degree:
			return []

		second_degree = (
			c.name
			for m in self.store if any(c.name in first_degree for c in m.cast)
			for c in m.cast
		)
		return _distinct(
			name for name in second_degree
			if name != actor and name not in first_degree
		)
