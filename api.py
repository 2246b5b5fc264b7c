"""
FastAPI server exposing the movie credits queries.
Endpoints:
- GET /health: basic health check
- one GET endpoint per analytical query (names passed as query parameters)
- GET /people/suggest?name=...&kind=actor: closest known name

Startup loads the credits CSV once; every request reads the same immutable store.

Run: uvicorn api:app --reload
"""

# Import standard libraries for timing and result conversion
import time  # measure startup latency
from dataclasses import asdict  # engine records -> response dicts
from typing import Dict, List, Optional  # precise typing for clarity
from pathlib import Path  # path-safe filesystem handling

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for data loading and queries
from movie_credits.config import Settings, setup_logging  # env-driven settings
from movie_credits.data_loader import CreditsLoader, find_credits_file  # loads credits
from movie_credits.name_lookup import NameLookup  # fuzzy name suggestions
from movie_credits.query_engine import QueryEngine  # the twenty queries

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Credits API", version="1.0.0")  # web app

# Globals that hold the engine instance and measured startup time
ENGINE: Optional[QueryEngine] = None  # will point to the initialized engine
LOOKUP: Optional[NameLookup] = None  # name suggestions over the same store
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class MovieCastSizeOut(BaseModel):
	title: str
	cast_count: int


class ActorMovieCountOut(BaseModel):
	actor: str
	movie_count: int


class CollaboratorCountOut(BaseModel):
	crew_member: str
	movie_count: int


class ScreenDuoOut(BaseModel):
	actor1: str
	actor2: str
	count: int


class CrewDiversityOut(BaseModel):
	name: str
	unique_departments: int


class TeamworkStatOut(BaseModel):
	director: str
	avg_cast: float
	avg_crew: float


class CareerPathOut(BaseModel):
	name: str
	most_frequent_department: str
	count: int


class DepartmentInfluenceOut(BaseModel):
	department: str
	avg_cast_size: float


class ArchetypeCountOut(BaseModel):
	archetype: str
	count: int


class CountOut(BaseModel):
	department: str
	count: int


class SuggestionOut(BaseModel):
	name: str
	kind: str
	suggestion: Optional[str] = None


# FastAPI startup hook to load the credits once
@app.on_event("startup")
async def startup_event():
	"""Load the credits file and build the engine."""
	global ENGINE, LOOKUP, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = Settings()  # read MOVIE_CREDITS_* settings
	setup_logging(settings.log_level, settings.log_file)
	logger.info("[API] Startup: loading credits...")  # log intent

	# Loader errors propagate: the server should not start on a broken dataset
	credits_path = settings.credits_path or find_credits_file(str(Path.cwd()))
	store = CreditsLoader().load_store(str(credits_path))

	ENGINE = QueryEngine(store)  # create engine
	LOOKUP = NameLookup(store, threshold=settings.suggestion_threshold)

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(store)} movies.")  # summary log


def get_engine() -> QueryEngine:
	"""Return the engine or fail with 503 while it is not ready."""
	if ENGINE is None:  # engine must be ready to serve
		logger.warning("[API] Query requested but engine not initialized")  # guard log
		raise HTTPException(status_code=503, detail="Engine not initialized")
	return ENGINE


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": ENGINE is not None,  # True if engine initialized
		"movies": len(ENGINE.store) if ENGINE is not None else 0,  # dataset size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/movies/by-director", response_model=List[str])
def movies_by_director(name: str = Query(..., description="Director name (exact)")):
	return get_engine().movies_by_director(name)


@app.get("/actors/characters", response_model=List[str])
def characters_by_actor(name: str = Query(..., description="Actor name (exact)")):
	return get_engine().characters_by_actor(name)


@app.get("/movies/top-cast-size", response_model=List[MovieCastSizeOut])
def top_movies_by_cast_size(n: int = Query(5, ge=0)):
	return [asdict(r) for r in get_engine().top_movies_by_cast_size(n)]


@app.get("/actors/top", response_model=List[ActorMovieCountOut])
def top_actors_by_movie_count(n: int = Query(10, ge=0)):
	return [asdict(r) for r in get_engine().top_actors_by_movie_count(n)]


@app.get("/departments", response_model=List[str])
def unique_crew_departments():
	return get_engine().unique_crew_departments()


@app.get("/movies/by-composer", response_model=List[str])
def movies_by_composer(name: str = Query(..., description="Composer name (exact)")):
	return get_engine().movies_by_composer(name)


@app.get("/movies/directors", response_model=Dict[int, str])
def movie_director_map():
	return get_engine().movie_director_map()


@app.get("/movies/with-duo", response_model=List[str])
def movies_with_duo(actor1: str = Query(...), actor2: str = Query(...)):
	return get_engine().movies_with_duo(actor1, actor2)


@app.get("/departments/crew-count", response_model=CountOut)
def count_crew_in_department(name: str = Query(..., description="Department name (exact)")):
	return CountOut(department=name, count=get_engine().count_crew_in_department(name))


@app.get("/movies/dual-role", response_model=List[str])
def dual_role_people_in_movie(title: str = Query(..., description="Movie title (exact)")):
	return get_engine().dual_role_people_in_movie(title)


@app.get("/directors/collaborators", response_model=List[CollaboratorCountOut])
def top_collaborators_with_director(name: str = Query(...), n: int = Query(5, ge=0)):
	return [asdict(r) for r in get_engine().top_collaborators_with_director(name, n)]


@app.get("/actors/duos", response_model=List[ScreenDuoOut])
def top_screen_duos(n: int = Query(10, ge=0)):
	return [asdict(r) for r in get_engine().top_screen_duos(n)]


@app.get("/crew/diversity", response_model=List[CrewDiversityOut])
def top_crew_diversity_index(n: int = Query(5, ge=0)):
	return [asdict(r) for r in get_engine().top_crew_diversity_index(n)]


@app.get("/movies/creative-trios", response_model=List[str])
def creative_trios():
	return get_engine().creative_trios()


@app.get("/actors/two-degrees", response_model=List[str])
def two_degrees_of_separation(name: str = Query(..., description="Actor name (exact)")):
	return get_engine().two_degrees_of_separation(name)


@app.get("/directors/teamwork", response_model=List[TeamworkStatOut])
def analyze_teamwork():
	return [asdict(r) for r in get_engine().analyze_teamwork()]


@app.get("/people/career-paths", response_model=List[CareerPathOut])
def dual_role_career_path():
	return [asdict(r) for r in get_engine().dual_role_career_path()]


@app.get("/directors/shared-collaborators", response_model=List[str])
def collaborators_of_two_directors(director1: str = Query(...), director2: str = Query(...)):
	return get_engine().collaborators_of_two_directors(director1, director2)


@app.get("/departments/influence", response_model=List[DepartmentInfluenceOut])
def analyze_department_influence():
	return [asdict(r) for r in get_engine().analyze_department_influence()]


@app.get("/actors/archetypes", response_model=List[ArchetypeCountOut])
def analyze_character_archetypes(name: str = Query(..., description="Actor name (exact)")):
	return [asdict(r) for r in get_engine().analyze_character_archetypes(name)]


@app.get("/people/suggest", response_model=SuggestionOut)
def suggest_name(name: str = Query(...), kind: str = Query('actor', pattern="^(actor|crew|director|title)$")):
	"""Closest known name of the given kind, for correcting a lookup that returned nothing."""
	if LOOKUP is None:
		raise HTTPException(status_code=503, detail="Engine not initialized")
	return SuggestionOut(name=name, kind=kind, suggestion=LOOKUP.suggest(name, kind))
