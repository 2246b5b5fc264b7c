"""
Report generation module.
Binds each query to a named text report and writes the reports to disk.
"""

from dataclasses import dataclass  # task bindings
from pathlib import Path  # filesystem-safe paths
from typing import Callable, Iterable, List, Optional, Tuple  # type hints

from loguru import logger  # console logging

from .name_lookup import NameLookup  # "did you mean" hints for empty lookups
from .query_engine import QueryEngine  # the twenty queries


@dataclass(frozen=True)
class ReportTask:
	"""One query bound to the report file it is written to."""
	file_name: str  # e.g. "task-1.txt"
	header: str  # first line of the report
	run: Callable[[], Iterable[str]]  # produces the report lines
	lookups: Tuple[Tuple[str, str], ...] = ()  # (name, kind) pairs the query looks up


class ReportWriter:
	"""Writes a header, an underline and the result lines to a UTF-8 text file."""

	def __init__(self, results_dir: str):
		self.results_dir = Path(results_dir)  # normalize path
		self.results_dir.mkdir(parents=True, exist_ok=True)  # ensure exists

	def write(self, file_name: str, header: str, lines: Iterable[str]) -> Path:
		path = self.results_dir / file_name  # destination
		content = [header, '-' * len(header)]  # header + underline
		content.extend(lines)  # one result per line
		path.write_text('\n'.join(content) + '\n', encoding='utf-8')
		return path


class ReportRunner:
	"""
	Runs report tasks one after another.
	A report that cannot be written is logged and skipped; the rest still run.
	"""

	def __init__(self, writer: ReportWriter, lookup: Optional[NameLookup] = None):
		self.writer = writer
		self.lookup = lookup

	def run_all(self, tasks: Iterable[ReportTask]) -> List[str]:
		"""Run every task and return the file names that were written."""
		written = []
		for task in tasks:
			lines = list(task.run())  # evaluate the query
			if not lines:
				self._hint_empty(task)
			try:
				path = self.writer.write(task.file_name, task.header, lines)
			except OSError as e:
				logger.error(f"[Reports] Failed to write {task.file_name}: {e}")
				continue
			logger.info(f"[Reports] Wrote {path} ({len(lines)} lines)")
			written.append(task.file_name)
		logger.info(f"[Reports] {len(written)} reports written")
		return written

	def _hint_empty(self, task: ReportTask) -> None:
		"""Log the closest known name for each lookup of an empty report."""
		if self.lookup is None:
			return
		for name, kind in task.lookups:
			suggestion = self.lookup.suggest(name, kind)
			if suggestion is None:
				logger.warning(f"[Reports] {task.file_name}: no {kind} named '{name}'")
			elif suggestion != name:
				logger.warning(f"[Reports] {task.file_name}: no {kind} named '{name}', did you mean '{suggestion}'?")


def default_tasks(engine: QueryEngine) -> List[ReportTask]:
	"""The twenty standard reports with their fixed parameters."""
	return [
		ReportTask(
			'task-1.txt', "Movies directed by 'Steven Spielberg':",
			lambda: engine.movies_by_director("Steven Spielberg"),
			(("Steven Spielberg", 'director'),),
		),
		ReportTask(
			'task-2.txt', "Characters played by 'Tom Hanks':",
			lambda: engine.characters_by_actor("Tom Hanks"),
			(("Tom Hanks", 'actor'),),
		),
		ReportTask(
			'task-3.txt', "Top 5 movies by cast size:",
			lambda: (f"{r.title} (cast size: {r.cast_count})" for r in engine.top_movies_by_cast_size(5)),
		),
		ReportTask(
			'task-4.txt', "Top 10 actors by number of movies:",
			lambda: (f"{r.actor} - {r.movie_count} movies" for r in engine.top_actors_by_movie_count(10)),
		),
		ReportTask(
			'task-5.txt', "Unique crew departments:",
			engine.unique_crew_departments,
		),
		ReportTask(
			'task-6.txt', "Movies scored by 'Hans Zimmer' (Original Music Composer):",
			lambda: engine.movies_by_composer("Hans Zimmer"),
			(("Hans Zimmer", 'crew'),),
		),
		ReportTask(
			'task-7.txt', "Movie id -> director:",
			lambda: (f"{movie_id} -> {name}" for movie_id, name in engine.movie_director_map().items()),
		),
		ReportTask(
			'task-8.txt', "Movies with both 'Brad Pitt' and 'George Clooney' in the cast:",
			lambda: engine.movies_with_duo("Brad Pitt", "George Clooney"),
			(("Brad Pitt", 'actor'), ("George Clooney", 'actor')),
		),
		ReportTask(
			'task-9.txt', "Number of people working in the 'Camera' department:",
			lambda: [str(engine.count_crew_in_department("Camera"))],
		),
		ReportTask(
			'task-10.txt', "People both in the cast and the crew of 'Titanic':",
			lambda: engine.dual_role_people_in_movie("Titanic"),
			(("Titanic", 'title'),),
		),
		ReportTask(
			'task-11.txt', "Inner circle of 'Quentin Tarantino' (top 5 crew members):",
			lambda: (
				f"{r.crew_member} - {r.movie_count} movies"
				for r in engine.top_collaborators_with_director("Quentin Tarantino", 5)
			),
			(("Quentin Tarantino", 'director'),),
		),
		ReportTask(
			'task-12.txt', "Top 10 screen duos:",
			lambda: (f"{r.actor1} & {r.actor2} - {r.count} movies" for r in engine.top_screen_duos(10)),
		),
		ReportTask(
			'task-13.txt', "Top 5 crew members by number of distinct departments:",
			lambda: (f"{r.name} - {r.unique_departments} departments" for r in engine.top_crew_diversity_index(5)),
		),
		ReportTask(
			'task-14.txt', "Movies with a creative trio (Director, Writer, Producer):",
			engine.creative_trios,
		),
		ReportTask(
			'task-15.txt', "Two degrees of separation from 'Kevin Bacon':",
			lambda: engine.two_degrees_of_separation("Kevin Bacon"),
			(("Kevin Bacon", 'actor'),),
		),
		ReportTask(
			'task-16.txt', "Teamwork: average cast and crew size per director:",
			lambda: (f"{r.director}: Cast = {r.avg_cast:.2f}, Crew = {r.avg_crew:.2f}" for r in engine.analyze_teamwork()),
		),
		ReportTask(
			'task-17.txt', "Career path of people who both act and work in crews (most frequent department):",
			lambda: (f"{r.name}: {r.most_frequent_department} ({r.count} times)" for r in engine.dual_role_career_path()),
		),
		ReportTask(
			'task-18.txt', "People who worked with both 'Martin Scorsese' and 'Christopher Nolan':",
			lambda: engine.collaborators_of_two_directors("Martin Scorsese", "Christopher Nolan"),
			(("Martin Scorsese", 'director'), ("Christopher Nolan", 'director')),
		),
		ReportTask(
			'task-19.txt', "Departments ranked by average cast size of their movies:",
			lambda: (f"{r.department}: Avg Cast Size = {r.avg_cast_size:.2f}" for r in engine.analyze_department_influence()),
		),
		ReportTask(
			'task-20.txt', "Character archetypes of 'Johnny Depp':",
			lambda: (f"{r.archetype} - {r.count} times" for r in engine.analyze_character_archetypes("Johnny Depp")),
			(("Johnny Depp", 'actor'),),
		),
	]
