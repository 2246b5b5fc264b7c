import pytest

from movie_credits.models import CastAppearance, CrewAppearance, MovieCredit
from movie_credits.relation_store import RelationStore


def build_movie(movie_id, title, cast=(), crew=()):
	"""cast: (id, name, character); crew: (id, name, department, job)"""
	return MovieCredit(
		movie_id=movie_id,
		title=title,
		cast=tuple(CastAppearance(*c) for c in cast),
		crew=tuple(CrewAppearance(*c) for c in crew),
	)


@pytest.fixture
def sample_store():
	"""Three small movies sharing a few people."""
	return RelationStore([
		build_movie(1, "Heist", cast=[
			(1, "Sam", "Leader"),
			(2, "Kim", "Driver"),
		], crew=[
			(1, "Sam", "Directing", "Director"),
			(3, "Lee", "Sound", "Sound Mixer"),
			(4, "Hans", "Sound", "Original Music Composer"),
		]),
		build_movie(2, "Heist II", cast=[
			(2, "Kim", "Captain Storm"),
			(5, "Max", "Captain Rain"),
			(6, "Ada", "Pilot"),
		], crew=[
			(1, "Sam", "Directing", "Director"),
			(1, "Sam", "Writing", "Screenplay Writer"),
			(1, "Sam", "Production", "Co-Producer"),
			(3, "Lee", "Sound", "Sound Mixer"),
			(7, "Ron", "Camera", "Camera Operator"),
		]),
		build_movie(3, "Quiet Night", cast=[
			(6, "Ada", "Nurse"),
			(8, "Tom", "Doctor"),
		], crew=[
			(9, "Joy", "Directing", "Director"),
			(3, "Lee", "Camera", "Focus Puller"),
			(8, "Tom", "", "Consultant"),
		]),
	])


@pytest.fixture
def empty_store():
	return RelationStore([])
