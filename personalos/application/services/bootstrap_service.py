from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from personalos.application.services.default_data import default_habits, default_todos
from personalos.domain.entities import Entity
from personalos.logging_config import BOOTSTRAP, get_logger
from personalos.repositories import Repository
from personalos.repositories.container import Repositories
from personalos.repositories.errors import StoreNotConfiguredError


class BootstrapPhase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    SKIPPED_PRODUCTION = "skipped_production"
    DONE = "done"


class BootstrapOutcome(str, Enum):
    ALREADY_DONE = "already_done"
    SKIPPED_PRODUCTION = "skipped_production"
    SEEDED = "seeded"


_FINISHED = (BootstrapPhase.SKIPPED_PRODUCTION, BootstrapPhase.DONE)


class BootstrapState:
    """Owned one-shot flag guarding the bootstrap pass.

    ``try_begin`` is an atomic check-and-set: of any number of concurrent
    callers, exactly one gets ``True`` until :meth:`reset` is called.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._phase = BootstrapPhase.NOT_STARTED

    @property
    def phase(self) -> BootstrapPhase:
        with self._lock:
            return self._phase

    @property
    def has_bootstrapped(self) -> bool:
        return self.phase in _FINISHED

    def try_begin(self) -> bool:
        with self._lock:
            if self._phase is not BootstrapPhase.NOT_STARTED:
                return False
            self._phase = BootstrapPhase.RUNNING
            return True

    def finish(self, phase: BootstrapPhase) -> None:
        if phase not in _FINISHED:
            raise ValueError(f"Cannot finish bootstrap in phase {phase.value}")
        with self._lock:
            self._phase = phase

    def reset(self) -> None:
        """Clear the flag so the next pass runs again. Seeded rows are kept."""
        with self._lock:
            self._phase = BootstrapPhase.NOT_STARTED


# Shared by every Bootstrapper built without an explicit state, making the
# bootstrap pass one-shot for the whole process.
PROCESS_STATE = BootstrapState()


@dataclass(frozen=True)
class SeedPlan:
    kind: str
    repository: Repository[Any]
    defaults: Callable[[], Sequence[Entity]]


@dataclass
class BootstrapResult:
    outcome: BootstrapOutcome
    seeded: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)


def default_seed_plans(repositories: Repositories) -> list[SeedPlan]:
    return [
        SeedPlan("todos", repositories.todo, default_todos),
        SeedPlan("habits", repositories.habit, default_habits),
    ]


class Bootstrapper:
    """Seed default rows into empty repositories, once, outside production.

    - The environment predicate is consulted once per pass; when it denies
      seeding no repository is touched.
    - A kind that already holds any row is left alone.
    - Seeding is best effort: failed reads or saves are logged and the pass
      carries on. The state is marked finished whatever happens, so a broken
      store can never cause repeated reseeding attempts.
    """

    def __init__(
        self,
        should_seed_mock_data: Callable[[], bool],
        *,
        state: Optional[BootstrapState] = None,
        plans: Callable[[Repositories], Sequence[SeedPlan]] = default_seed_plans,
    ) -> None:
        self._should_seed = should_seed_mock_data
        self._state = state if state is not None else PROCESS_STATE
        self._plans = plans
        self._logger = get_logger(BOOTSTRAP)

    @property
    def state(self) -> BootstrapState:
        return self._state

    def bootstrap(self, repositories: Repositories) -> BootstrapResult:
        if not self._state.try_begin():
            return BootstrapResult(BootstrapOutcome.ALREADY_DONE)

        final_phase = BootstrapPhase.DONE
        try:
            self._logger.info("Bootstrapping application data")
            if not self._seeding_permitted():
                self._logger.info("Production environment detected - skipping mock data seeding")
                final_phase = BootstrapPhase.SKIPPED_PRODUCTION
                return BootstrapResult(BootstrapOutcome.SKIPPED_PRODUCTION)

            self._logger.info("Development/Staging environment - seeding mock data")
            result = BootstrapResult(BootstrapOutcome.SEEDED)
            for plan in self._plans(repositories):
                self._seed_if_empty(plan, result)
            self._logger.info(
                "Data bootstrap complete",
                extra={"seeded": result.seeded, "failures": len(result.failures)},
            )
            return result
        finally:
            self._state.finish(final_phase)

    def reset(self) -> None:
        self._state.reset()

    def _seeding_permitted(self) -> bool:
        try:
            return bool(self._should_seed())
        except Exception:
            self._logger.error("Environment check failed; treating as production", exc_info=True)
            return False

    def _seed_if_empty(self, plan: SeedPlan, result: BootstrapResult) -> None:
        try:
            existing = plan.repository.fetch_all()
        except StoreNotConfiguredError:
            raise
        except Exception as exc:
            self._logger.error(
                "Failed to read existing rows, skipping seed",
                extra={"kind": plan.kind},
                exc_info=True,
            )
            result.failures.append(f"{plan.kind}: {exc}")
            return

        if existing:
            self._logger.info(
                "Rows already exist, skipping seed",
                extra={"kind": plan.kind, "existing": len(existing)},
            )
            result.skipped.append(plan.kind)
            return

        seeded = 0
        for entity in plan.defaults():
            try:
                plan.repository.save(entity)
            except StoreNotConfiguredError:
                raise
            except Exception as exc:
                self._logger.error(
                    "Failed to seed row",
                    extra={"kind": plan.kind, "entity_id": entity.id},
                    exc_info=True,
                )
                result.failures.append(f"{plan.kind}/{entity.id}: {exc}")
                continue
            seeded += 1

        result.seeded[plan.kind] = seeded
        self._logger.info("Seeded default rows", extra={"kind": plan.kind, "count": seeded})
