"""
Module: store.project_store

Purpose:
    JSON-file persistence for projects: a master pool plus the tests
    generated from it. Receives GenerationResult.tests from the shuffler
    and keeps the aggregate counters (test count, total questions) in step
    with the stored tests.

Key Functions:
    - ProjectStore.add_tests(): Append generated tests to a project
    - ProjectStore.delete_test() / duplicate_test(): Collection edits
    - ProjectStore.update_master_pool(): Replace the pool

Key Classes:
    - Project: Immutable project record with calculated counters
    - ProjectStore: Locked read-modify-write access to the store file
    - StoreError: Missing projects/tests, conflicts, corrupt files

Dependencies:
    - store.file_locking: portalocker based locking

Used By:
    - cli: --store / --project-id
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, TypeVar

from testmaker_toolkit.core.models import GeneratedTest, MasterPool

from .file_locking import locked_read_json, locked_read_modify_write_json

logger = logging.getLogger(__name__)

STORE_SCHEMA_VERSION = 1

T = TypeVar("T")


class StoreError(Exception):
    """Error reading or updating the project store."""
    pass


@dataclass(frozen=True)
class Project:
    """
    A master pool and the tests generated from it (immutable).

    Attributes:
        id: Project identifier
        name: Display name
        master_pool: Author-maintained question pool
        tests: Generated tests in creation order
        description: Free text

    Invariants:
        - Test ids are unique
        - test_count / total_questions are calculated, never stored
    """

    id: str
    name: str
    master_pool: MasterPool = field(default_factory=MasterPool)
    tests: tuple[GeneratedTest, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        ids = [t.id for t in self.tests]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate test ids in project {self.id}")

    @property
    def test_count(self) -> int:
        return len(self.tests)

    @property
    def total_questions(self) -> int:
        return sum(t.question_count for t in self.tests)

    @property
    def test_names(self) -> frozenset[str]:
        return frozenset(t.name for t in self.tests)

    def get_test(self, test_id: str) -> GeneratedTest | None:
        for test in self.tests:
            if test.id == test_id:
                return test
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "masterTest": self.master_pool.to_dict(),
            "tests": [t.to_dict() for t in self.tests],
            "testCount": self.test_count,
            "totalQuestions": self.total_questions,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Project:
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            master_pool=MasterPool.from_dict(data.get("masterTest") or {}),
            tests=tuple(GeneratedTest.from_dict(t) for t in data.get("tests", [])),
            description=data.get("description", ""),
        )


def _empty_document() -> Dict[str, Any]:
    return {"schema_version": STORE_SCHEMA_VERSION, "projects": []}


def _parse_projects(data: Dict[str, Any]) -> List[Project]:
    version = data.get("schema_version", STORE_SCHEMA_VERSION)
    if version != STORE_SCHEMA_VERSION:
        raise StoreError(
            f"Unsupported store schema version: {version} (expected {STORE_SCHEMA_VERSION})"
        )
    try:
        return [Project.from_dict(p) for p in data.get("projects", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Corrupt project entry: {e}") from e


def _index_of(projects: List[Project], project_id: str) -> int:
    for i, project in enumerate(projects):
        if project.id == project_id:
            return i
    raise StoreError(f"Project not found: {project_id}")


def _copy_name(name: str, taken: Iterable[str]) -> str:
    """'<name> (Copy)', numbered when that is already taken."""
    taken = set(taken)
    candidate = f"{name} (Copy)"
    counter = 1
    while candidate in taken:
        counter += 1
        candidate = f"{name} (Copy {counter})"
    return candidate


class ProjectStore:
    """
    Projects persisted in a single JSON file.

    Every mutation is one exclusive-locked read-modify-write, so concurrent
    processes appending tests cannot lose each other's updates.

    Example:
        >>> store = ProjectStore(Path("projects.json"))
        >>> store.add_project(Project(id="p1", name="Physics", master_pool=pool))
        >>> store.add_tests("p1", result.tests).test_count
        10
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def list_projects(self) -> List[Project]:
        """
        Raises:
            StoreError: If the store file is corrupt or has an unsupported version
        """
        try:
            data = locked_read_json(self.path, default=_empty_document)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt store file {self.path}: {e}") from e
        return _parse_projects(data)

    def get_project(self, project_id: str) -> Project:
        """
        Raises:
            StoreError: If no project has this id
        """
        projects = self.list_projects()
        return projects[_index_of(projects, project_id)]

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def add_project(self, project: Project) -> Project:
        def apply(projects: List[Project]) -> Project:
            if any(p.id == project.id for p in projects):
                raise StoreError(f"Project already exists: {project.id}")
            projects.append(project)
            return project

        added = self._update(apply)
        logger.info(f"Added project {project.name!r} ({project.id})")
        return added

    def update_master_pool(self, project_id: str, pool: MasterPool) -> Project:
        def apply(projects: List[Project]) -> Project:
            i = _index_of(projects, project_id)
            projects[i] = replace(projects[i], master_pool=pool)
            return projects[i]

        return self._update(apply)

    def add_tests(self, project_id: str, tests: Iterable[GeneratedTest]) -> Project:
        """
        Append generated tests to a project.

        Args:
            project_id: Target project
            tests: Tests to append, in order

        Returns:
            Updated project (counters reflect the new tests)

        Raises:
            StoreError: If the project is missing or a test id/name is
                already used in the project
        """
        tests = tuple(tests)

        def apply(projects: List[Project]) -> Project:
            i = _index_of(projects, project_id)
            project = projects[i]
            existing_ids = {t.id for t in project.tests}
            clashes = [t.id for t in tests if t.id in existing_ids]
            if clashes:
                raise StoreError(f"Test ids already in project {project_id}: {clashes}")
            name_clashes = [t.name for t in tests if t.name in project.test_names]
            if name_clashes:
                raise StoreError(f"Test names already in project {project_id}: {name_clashes}")
            try:
                projects[i] = replace(project, tests=project.tests + tests)
            except ValueError as e:
                raise StoreError(str(e)) from e
            return projects[i]

        updated = self._update(apply)
        logger.info(
            f"Project {project_id}: added {len(tests)} tests "
            f"(now {updated.test_count} tests, {updated.total_questions} questions)"
        )
        return updated

    def delete_test(self, project_id: str, test_id: str) -> Project:
        """
        Raises:
            StoreError: If the project or test is missing
        """
        def apply(projects: List[Project]) -> Project:
            i = _index_of(projects, project_id)
            project = projects[i]
            if project.get_test(test_id) is None:
                raise StoreError(f"Test not found in project {project_id}: {test_id}")
            projects[i] = replace(
                project,
                tests=tuple(t for t in project.tests if t.id != test_id),
            )
            return projects[i]

        return self._update(apply)

    def duplicate_test(
        self,
        project_id: str,
        test_id: str,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> GeneratedTest:
        """
        Copy a test under a new id, name and timestamp.

        Returns:
            The new test (appended to the project)

        Raises:
            StoreError: If the project or test is missing
        """
        def apply(projects: List[Project]) -> GeneratedTest:
            i = _index_of(projects, project_id)
            project = projects[i]
            original = project.get_test(test_id)
            if original is None:
                raise StoreError(f"Test not found in project {project_id}: {test_id}")
            copy = replace(
                original,
                id=str(uuid.uuid4()),
                name=_copy_name(original.name, project.test_names),
                created_at=clock(),
            )
            projects[i] = replace(project, tests=project.tests + (copy,))
            return copy

        return self._update(apply)

    def _update(self, apply: Callable[[List[Project]], T]) -> T:
        """Run apply on the parsed project list inside one locked write."""
        outcome: Dict[str, T] = {}

        def modifier(data: Dict[str, Any]) -> Dict[str, Any]:
            projects = _parse_projects(data)
            outcome["value"] = apply(projects)
            return {
                "schema_version": STORE_SCHEMA_VERSION,
                "projects": [p.to_dict() for p in projects],
            }

        try:
            locked_read_modify_write_json(self.path, modifier, default=_empty_document)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt store file {self.path}: {e}") from e
        return outcome["value"]
