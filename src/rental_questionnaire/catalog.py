"""CatalogStore — loads a needs-assessment question catalog from YAML.

The production catalog lives in the database and is served by
``GET /api/needs-assessment/questions``; this store reads the same records
from a YAML file.  It is used to seed the database (``rental-seed``), to run
the questionnaire offline, and in tests.

File layout::

    categories:            # optional, overrides the built-in tables
      mandatory: [...]
      accessory_suffix: " - wyposażenie"
      aliases: {"Nagrzewnice": "Nagrzewnica"}
    questions:
      - id: 1
        category: "Informacje ogólne"
        question: "Lokalizacja inwestycji"
        type: text
        isRequired: true
        position: 1

Usage::

    store = CatalogStore()      # defaults to catalog/needs_assessment.yaml
    store.load()
    plan = build_plan(store.questions, {}, store.rules)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from rental_questionnaire.categories import CategoryRules
from rental_questionnaire.interfaces import CatalogSource
from rental_questionnaire.models.question import Question

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_FILE = "needs_assessment.yaml"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_questions(raw: list[dict[str, Any]]) -> list[Question]:
    """Validate raw catalog records into :class:`Question` models.

    Raises:
        ValueError: on duplicate question ids.
    """
    questions: list[Question] = []
    seen: set[int] = set()
    for record in raw:
        q = Question.model_validate(record)
        if q.id in seen:
            raise ValueError(f"Duplicate question id {q.id} in catalog")
        seen.add(q.id)
        questions.append(q)
    return questions


# ---------------------------------------------------------------------------
# CatalogStore
# ---------------------------------------------------------------------------

class CatalogStore(CatalogSource):
    """Loads a catalog file and exposes its questions and category rules.

    Attributes populated after :meth:`load`:

        questions — list[Question] in file order
        rules     — CategoryRules (file overrides applied)
    """

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = find_repo_root() / "catalog" / DEFAULT_CATALOG_FILE
        self._path = Path(path)

        # Populated by load()
        self.questions: list[Question] = []
        self.rules: CategoryRules = CategoryRules()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Parse the catalog file.

        Raises ``FileNotFoundError`` if the file is missing and ``ValueError``
        if it has no ``questions`` list.
        """
        raw = load_yaml(self._path) or {}
        records = raw.get("questions")
        if not isinstance(records, list):
            raise ValueError(f"Catalog {self._path} has no 'questions' list")

        self.rules = CategoryRules.from_mapping(raw.get("categories"))
        self.questions = parse_questions(records)
        logger.info(
            "CatalogStore loaded: %d questions, %d categories from %s",
            len(self.questions),
            len({q.category for q in self.questions}),
            self._path,
        )

    def get_question(self, question_id: int) -> Question:
        """Look up one question by id.

        Raises:
            KeyError: if the id is not in the catalog.
        """
        for q in self.questions:
            if q.id == question_id:
                return q
        raise KeyError(question_id)

    async def fetch_questions(self) -> list[Question]:
        """Serve the catalog like the REST endpoint: active questions only."""
        if not self.questions:
            self.load()
        return [q for q in self.questions if q.is_active]
