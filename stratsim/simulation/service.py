"""
Simulation Service - runs analyses for a user session.

Flow for one run:
1. build_request() validates the input (nothing is sent if it fails)
2. One outbound Analysis Provider call, retried with exponential backoff
   on ProviderUnavailable only
3. If the run was abandoned while in flight, the late response is discarded
4. validate_response() checks the payload; the validated result becomes the
   session's current result, ready to be saved into the Scenario Store

A failed or abandoned run never touches the Scenario Store.
"""
import asyncio
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Set

from stratsim.config import settings
from stratsim.exceptions import AnalysisAbandoned, InvalidInput, ProviderUnavailable
from stratsim.scenarios.comparison import compare_scenarios
from stratsim.scenarios.schemas import SavedScenario, ScenarioComparison
from stratsim.scenarios.store import ScenarioStore
from stratsim.simulation.contract import build_request, present_simulation, validate_response
from stratsim.simulation.provider import AnalysisProvider, OpenAIAnalysisProvider
from stratsim.simulation.schemas import HistoricalContext, SimulationInput, SimulationResult

logger = logging.getLogger(__name__)


def generate_id(prefix: str) -> str:
    """Generate a unique ID with a prefix."""
    return f"{prefix}_{secrets.token_hex(6)}"


# =============================================================================
# Retry
# =============================================================================

@dataclass
class RetryPolicy:
    """Exponential backoff policy for provider calls."""
    max_attempts: int = 3
    initial_backoff: float = 1.0
    max_backoff: float = 30.0
    backoff_multiplier: float = 2.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.PROVIDER_MAX_ATTEMPTS,
            initial_backoff=settings.PROVIDER_INITIAL_BACKOFF_SECONDS,
            max_backoff=settings.PROVIDER_MAX_BACKOFF_SECONDS,
        )

    def calculate_backoff(self, retry_count: int) -> float:
        """Delay before retry number `retry_count` (0-indexed)."""
        delay = self.initial_backoff * (self.backoff_multiplier ** retry_count)
        return min(delay, self.max_backoff)


async def call_with_retry(
    func: Callable[[], Awaitable[Any]],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    is_active: Optional[Callable[[], bool]] = None,
    run_id: str = "",
) -> Any:
    """
    Await `func()`, retrying ProviderUnavailable with backoff.

    Any other exception propagates immediately. When attempts are exhausted
    the last ProviderUnavailable is re-raised with the attempt count.
    `is_active` is checked before every attempt and after every failure;
    once it returns False no further call is made and AnalysisAbandoned is
    raised.
    """
    attempts = max(1, policy.max_attempts)

    for attempt in range(1, attempts + 1):
        if is_active is not None and not is_active():
            raise AnalysisAbandoned(run_id)
        try:
            return await func()
        except ProviderUnavailable as e:
            if is_active is not None and not is_active():
                raise AnalysisAbandoned(run_id) from e
            if attempt == attempts:
                logger.error(f"Analysis provider unavailable after {attempt} attempt(s): {e.message}")
                raise ProviderUnavailable(e.message, attempts=attempt, details=e.details) from e

            delay = policy.calculate_backoff(attempt - 1)
            logger.warning(
                f"Analysis provider unavailable (attempt {attempt}/{attempts}), retrying in {delay:.1f}s"
            )
            await sleep(delay)


# =============================================================================
# Session
# =============================================================================

@dataclass
class CompletedSimulation:
    """A validated simulation result that has not necessarily been saved."""
    run_id: str
    inputs: SimulationInput
    result: SimulationResult
    completed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "completed_at": self.completed_at,
            "inputs": self.inputs,
            "result": self.result,
            "insights": present_simulation(self.result).model_dump(),
        }


class SimulationSession:
    """
    Per-user session state: in-flight runs, the latest result and the store.

    Runs for different inputs may proceed concurrently; identical inputs are
    not deduplicated. Saves are serialized so ids and ordering stay
    deterministic.
    """

    def __init__(
        self,
        session_id: str,
        provider: AnalysisProvider,
        retry_policy: Optional[RetryPolicy] = None,
        store: Optional[ScenarioStore] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.session_id = session_id
        self.provider = provider
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self.store = store or ScenarioStore()
        self.current: Optional[CompletedSimulation] = None
        self._in_flight: Set[str] = set()
        self._save_lock = asyncio.Lock()
        self._sleep = sleep

    @property
    def in_flight(self) -> List[str]:
        return sorted(self._in_flight)

    async def run(
        self,
        data: SimulationInput,
        history: Optional[HistoricalContext] = None,
    ) -> CompletedSimulation:
        """
        Run one simulation.

        Raises:
            InvalidInput / UnknownVariable: rejected input, no call made
            ProviderUnavailable: retries exhausted
            MalformedAnalysisResponse: payload failed contract validation
            AnalysisAbandoned: run was abandoned before its response arrived
        """
        request = build_request(data, history)
        run_id = generate_id("run")
        self._in_flight.add(run_id)
        logger.info(f"Session {self.session_id}: starting simulation {run_id} ({request.simulation_type.value})")

        try:
            payload = await call_with_retry(
                lambda: self.provider.analyze(request),
                self.retry_policy,
                sleep=self._sleep,
                is_active=lambda: run_id in self._in_flight,
                run_id=run_id,
            )
        finally:
            still_active = run_id in self._in_flight
            self._in_flight.discard(run_id)

        if not still_active:
            logger.info(f"Session {self.session_id}: discarding late response for abandoned run {run_id}")
            raise AnalysisAbandoned(run_id)

        result = validate_response(payload)
        self.current = CompletedSimulation(
            run_id=run_id,
            inputs=data,
            result=result,
            completed_at=datetime.now(timezone.utc),
        )
        logger.info(
            f"Session {self.session_id}: simulation {run_id} complete, "
            f"viability {result.simulation_summary.viability_score:g}"
        )
        return self.current

    def abandon(self, run_id: Optional[str] = None) -> List[str]:
        """Abandon one in-flight run, or all of them when no id is given."""
        if run_id is None:
            abandoned = sorted(self._in_flight)
        else:
            abandoned = [run_id] if run_id in self._in_flight else []

        for rid in abandoned:
            self._in_flight.discard(rid)
        if abandoned:
            logger.info(f"Session {self.session_id}: abandoned runs {abandoned}")
        return abandoned

    async def save_current(self, name: Optional[str] = None) -> SavedScenario:
        """Save the latest completed result into the Scenario Store."""
        async with self._save_lock:
            if self.current is None:
                raise InvalidInput("No completed simulation to save")
            return self.store.save(self.current.result, name=name, inputs=self.current.inputs)

    def compare(self, scenario_ids: Optional[Sequence[int]] = None) -> ScenarioComparison:
        """Compare saved scenarios; all of them when no ids are given."""
        if scenario_ids is None:
            scenarios = self.store.list()
        else:
            if len(set(scenario_ids)) != len(scenario_ids):
                raise InvalidInput("Scenario ids must be distinct", field="scenario_ids")
            scenarios = [self.store.get(sid) for sid in scenario_ids]
        return compare_scenarios(scenarios)


class SessionRegistry:
    """In-memory registry of simulation sessions keyed by session id."""

    def __init__(
        self,
        provider_factory: Callable[[], AnalysisProvider],
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self._provider_factory = provider_factory
        self._retry_policy = retry_policy
        self._sessions: Dict[str, SimulationSession] = {}

    def get(self, session_id: str) -> SimulationSession:
        """Return the session, creating it on first use."""
        session = self._sessions.get(session_id)
        if session is None:
            session = SimulationSession(
                session_id,
                provider=self._provider_factory(),
                retry_policy=self._retry_policy,
            )
            self._sessions[session_id] = session
        return session

    def drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def clear(self) -> None:
        self._sessions.clear()


_default_provider: Optional[AnalysisProvider] = None


def _shared_provider() -> AnalysisProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = OpenAIAnalysisProvider()
    return _default_provider


# Global session registry
sessions = SessionRegistry(_shared_provider)


def get_session_registry() -> SessionRegistry:
    """FastAPI dependency for the session registry."""
    return sessions
