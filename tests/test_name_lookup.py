"""
Tests for NameLookup fuzzy suggestions and the store name catalogues.
"""

import pytest

from movie_credits.name_lookup import NameLookup


def test_store_catalogues(sample_store):
	assert sample_store.get_all_actors() == ["Ada", "Kim", "Max", "Sam", "Tom"]
	assert sample_store.get_all_directors() == ["Joy", "Sam"]
	assert "Hans" in sample_store.get_all_crew()
	assert sample_store.get_all_titles() == ["Heist", "Heist II", "Quiet Night"]


def test_exact_name_returns_itself(sample_store):
	lookup = NameLookup(sample_store)
	assert lookup.suggest("Kim", 'actor') == "Kim"


def test_close_title_is_suggested(sample_store):
	lookup = NameLookup(sample_store, threshold=80)
	assert lookup.suggest("Quiet Nite", 'title') == "Quiet Night"


def test_unrelated_name_gives_none(sample_store):
	lookup = NameLookup(sample_store)
	assert lookup.suggest("Zzyzx Qwerty", 'director') is None
	assert lookup.suggest("   ", 'actor') is None


def test_unknown_kind(sample_store):
	with pytest.raises(ValueError):
		NameLookup(sample_store).suggest("Kim", 'producer')


def test_empty_store(empty_store):
	assert NameLookup(empty_store).suggest("Kim", 'actor') is None
