"""
Tests for the Simulation Service.

Tests cover retry with backoff, failure isolation from the Scenario Store,
abandonment of in-flight runs and the OpenAI-backed provider.
"""

import asyncio
import json

import httpx
import pytest
from openai import APIConnectionError
from unittest.mock import AsyncMock, MagicMock

from stratsim.exceptions import (
    AnalysisAbandoned,
    InvalidInput,
    MalformedAnalysisResponse,
    ProviderUnavailable,
    UnknownVariable,
)
from stratsim.simulation import AnalysisProvider, OpenAIAnalysisProvider, SimulationInput, build_request
from stratsim.simulation.service import RetryPolicy, SessionRegistry, SimulationSession, call_with_retry


# =============================================================================
# Fixtures
# =============================================================================

class GatedProvider(AnalysisProvider):
    """Provider that holds its response until released."""

    def __init__(self, payload):
        self.payload = payload
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def analyze(self, request):
        self.started.set()
        await self.release.wait()
        return self.payload


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(delay):
        sleeps.append(delay)
    return _sleep


@pytest.fixture
def strategy():
    return SimulationInput(strategy_text="Launch an enterprise tier")


def make_session(provider, fake_sleep, max_attempts=3):
    return SimulationSession(
        "session-1",
        provider=provider,
        retry_policy=RetryPolicy(max_attempts=max_attempts, initial_backoff=1.0, max_backoff=30.0),
        sleep=fake_sleep,
    )


def mock_provider(**kwargs):
    provider = MagicMock()
    provider.analyze = AsyncMock(**kwargs)
    return provider


# =============================================================================
# Unit Tests - RetryPolicy
# =============================================================================

class TestRetryPolicy:
    """Tests for exponential backoff."""

    def test_backoff_doubles(self):
        policy = RetryPolicy(initial_backoff=1.0)
        assert [policy.calculate_backoff(n) for n in range(3)] == [1.0, 2.0, 4.0]

    def test_backoff_capped(self):
        policy = RetryPolicy(initial_backoff=1.0, max_backoff=5.0)
        assert policy.calculate_backoff(10) == 5.0

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, fake_sleep, sleeps):
        func = AsyncMock(side_effect=MalformedAnalysisResponse("bad"))
        with pytest.raises(MalformedAnalysisResponse):
            await call_with_retry(func, RetryPolicy(), sleep=fake_sleep)
        assert func.await_count == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_inactive_run_makes_no_call(self, fake_sleep):
        func = AsyncMock(return_value={})
        with pytest.raises(AnalysisAbandoned):
            await call_with_retry(func, RetryPolicy(), sleep=fake_sleep, is_active=lambda: False, run_id="run_x")
        func.assert_not_awaited()


# =============================================================================
# Unit Tests - SimulationSession.run
# =============================================================================

class TestSimulationRun:
    """Tests for running simulations."""

    @pytest.mark.asyncio
    async def test_success(self, payload, strategy, fake_sleep):
        session = make_session(mock_provider(return_value=payload), fake_sleep)
        completed = await session.run(strategy)

        assert completed.run_id.startswith("run_")
        assert session.current is completed
        assert session.in_flight == []
        assert len(session.store) == 0

    @pytest.mark.asyncio
    async def test_retry_then_success(self, payload, strategy, fake_sleep, sleeps):
        provider = mock_provider(side_effect=[ProviderUnavailable("timeout"), payload])
        session = make_session(provider, fake_sleep)
        completed = await session.run(strategy)

        assert completed.result.simulation_summary.scenario_name == "Enterprise Push"
        assert provider.analyze.await_count == 2
        assert sleeps == [1.0]

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, strategy, fake_sleep, sleeps):
        provider = mock_provider(side_effect=ProviderUnavailable("down"))
        session = make_session(provider, fake_sleep)

        with pytest.raises(ProviderUnavailable) as exc_info:
            await session.run(strategy)

        assert exc_info.value.attempts == 3
        assert sleeps == [1.0, 2.0]
        assert session.current is None
        assert len(session.store) == 0

    @pytest.mark.asyncio
    async def test_malformed_response_leaves_state_untouched(self, payload, strategy, fake_sleep):
        del payload["simulation_summary"]
        session = make_session(mock_provider(return_value=payload), fake_sleep)

        with pytest.raises(MalformedAnalysisResponse):
            await session.run(strategy)
        assert session.current is None
        assert len(session.store) == 0

    @pytest.mark.asyncio
    async def test_invalid_input_makes_no_call(self, fake_sleep):
        provider = mock_provider(return_value={})
        session = make_session(provider, fake_sleep)

        with pytest.raises(UnknownVariable):
            await session.run(SimulationInput(strategy_text="x", external_factors={"weather": 1}))
        provider.analyze.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_abandoned_run_discards_late_response(self, payload, strategy, fake_sleep):
        provider = GatedProvider(payload)
        session = make_session(provider, fake_sleep)

        task = asyncio.create_task(session.run(strategy))
        await provider.started.wait()
        abandoned = session.abandon()
        provider.release.set()

        with pytest.raises(AnalysisAbandoned):
            await task
        assert len(abandoned) == 1
        assert session.current is None
        assert session.in_flight == []

    @pytest.mark.asyncio
    async def test_abandon_during_backoff_stops_retries(self, strategy):
        """No further provider call is made once the run is abandoned."""
        provider = mock_provider(side_effect=ProviderUnavailable("down"))
        state = {}

        async def abandon_on_sleep(delay):
            state["abandoned"] = state["session"].abandon()

        session = make_session(provider, abandon_on_sleep)
        state["session"] = session

        with pytest.raises(AnalysisAbandoned):
            await session.run(strategy)
        assert provider.analyze.await_count == 1
        assert len(state["abandoned"]) == 1
        assert session.in_flight == []

    @pytest.mark.parametrize("failure,error", [
        pytest.param(ProviderUnavailable("down"), ProviderUnavailable, id="unavailable"),
        pytest.param({"simulation_summary": {}}, MalformedAnalysisResponse, id="malformed"),
    ])
    @pytest.mark.asyncio
    async def test_failed_run_keeps_saved_scenarios(self, payload, strategy, fake_sleep, failure, error):
        provider = mock_provider(side_effect=[payload, failure])
        session = make_session(provider, fake_sleep, max_attempts=1)

        previous = await session.run(strategy)
        await session.save_current()
        saved_before = [s.model_dump_json() for s in session.store.list()]

        with pytest.raises(error):
            await session.run(strategy)

        assert [s.model_dump_json() for s in session.store.list()] == saved_before
        assert session.current is previous


# =============================================================================
# Unit Tests - saving and comparing
# =============================================================================

class TestSessionScenarios:
    """Tests for saving and comparing through the session."""

    @pytest.mark.asyncio
    async def test_save_without_result(self, fake_sleep):
        session = make_session(mock_provider(return_value={}), fake_sleep)
        with pytest.raises(InvalidInput):
            await session.save_current()

    @pytest.mark.asyncio
    async def test_save_and_compare(self, make_payload, strategy, fake_sleep):
        provider = mock_provider(side_effect=[
            make_payload(scenario_name="A", viability=60),
            make_payload(scenario_name="B", viability=90),
        ])
        session = make_session(provider, fake_sleep)

        await session.run(strategy)
        first = await session.save_current()
        await session.run(strategy)
        second = await session.save_current(name="Bold plan")

        comparison = session.compare()
        assert comparison.scenario_ids == [first.id, second.id]
        assert comparison.winner_ids == [second.id]

    @pytest.mark.asyncio
    async def test_compare_rejects_duplicate_ids(self, payload, strategy, fake_sleep):
        session = make_session(mock_provider(return_value=payload), fake_sleep)
        await session.run(strategy)
        saved = await session.save_current()

        with pytest.raises(InvalidInput):
            session.compare([saved.id, saved.id])


class TestSessionRegistry:
    """Tests for the in-memory session registry."""

    def test_get_creates_once(self):
        registry = SessionRegistry(lambda: MagicMock(), retry_policy=RetryPolicy())
        assert registry.get("a") is registry.get("a")
        assert registry.get("a") is not registry.get("b")

    def test_sessions_are_isolated(self):
        registry = SessionRegistry(lambda: MagicMock(), retry_policy=RetryPolicy())
        assert registry.get("a").store is not registry.get("b").store


# =============================================================================
# Unit Tests - OpenAIAnalysisProvider
# =============================================================================

def make_client(content=None, side_effect=None):
    client = MagicMock()
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=side_effect)
    return client


class TestOpenAIAnalysisProvider:
    """Tests for the OpenAI-backed provider."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self, payload, strategy):
        client = make_client(content=json.dumps(payload))
        provider = OpenAIAnalysisProvider(client=client, model="gpt-4o")

        result = await provider.analyze(build_request(strategy))

        assert result == payload
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_transport_error(self, strategy):
        error = APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
        provider = OpenAIAnalysisProvider(client=make_client(side_effect=error))

        with pytest.raises(ProviderUnavailable):
            await provider.analyze(build_request(strategy))

    @pytest.mark.asyncio
    async def test_invalid_json(self, strategy):
        provider = OpenAIAnalysisProvider(client=make_client(content="not json"))
        with pytest.raises(MalformedAnalysisResponse):
            await provider.analyze(build_request(strategy))

    @pytest.mark.asyncio
    async def test_empty_content(self, strategy):
        provider = OpenAIAnalysisProvider(client=make_client(content=""))
        with pytest.raises(MalformedAnalysisResponse):
            await provider.analyze(build_request(strategy))
