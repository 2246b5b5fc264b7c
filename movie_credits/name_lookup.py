"""
Name lookup module.
Suggests the closest known actor, crew member, director or title for a name
that matched nothing, so an empty report can point at a likely typo.
"""

from typing import Dict, List, Optional

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging

from .relation_store import RelationStore


class NameLookup:
	"""
	Fuzzy "did you mean" helper over the names held by a relation store.
	Queries themselves stay exact; this is only consulted for diagnostics.
	"""

	KINDS = ('actor', 'crew', 'director', 'title')

	def __init__(self, store: RelationStore, threshold: float = 85):
		self.threshold = threshold
		# Pre-build lists for fuzzy search to avoid recreating on each lookup
		self._catalogues: Dict[str, List[str]] = {
			'actor': store.get_all_actors(),
			'crew': store.get_all_crew(),
			'director': store.get_all_directors(),
			'title': store.get_all_titles(),
		}
		self._exact = {kind: set(names) for kind, names in self._catalogues.items()}
		logger.debug(
			"[Lookup] Initialized with {} actors, {} crew, {} directors, {} titles",
			*(len(self._catalogues[k]) for k in self.KINDS),
		)

	def suggest(self, name: str, kind: str = 'actor') -> Optional[str]:
		"""Return the best match for name among known names of this kind, or None."""
		if kind not in self._catalogues:
			raise ValueError(f"Unknown name kind '{kind}', expected one of {self.KINDS}")
		if not name or not name.strip():
			return None
		if name in self._exact[kind]:
			return name

		best = process.extractOne(name, self._catalogues[kind], scorer=fuzz.WRatio)
		if best and best[1] >= self.threshold:
			logger.debug("[Lookup] {} fuzzy match: '{}' -> '{}' (score={:.1f})", kind, name, best[0], best[1])
			return best[0]
		return None
