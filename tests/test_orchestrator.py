"""
Tests for the prompt orchestrator: retry, timeout, parsing and isolation.
"""

import pytest

from domain.errors import GenerationFailed, InvalidGeneratedShape, RateLimited
from generation.enrich import build_context
from generation.orchestrator import (
    GenerationState,
    PromptOrchestrator,
    RequestTrace,
    RetryPolicy,
    parse_structured,
)
from generation.prompts import ALL_SUBPROMPTS, BASE_SYSTEM_PROMPT, SUBPROMPTS

NARRATIVE = {"narrative": "Der Akku liefert 5000 mAh. Er passt in viele Lampen."}


@pytest.fixture
def context(battery_record, battery):
    return build_context(battery_record, battery)


def _orchestrator(generator, sleep, **kwargs):
    kwargs.setdefault("retry", RetryPolicy(max_retries=3, base_delay=1.0))
    return PromptOrchestrator(generator=generator, sleep=sleep, **kwargs)


class TestRetryPolicy:
    def test_exponential_delays(self):
        policy = RetryPolicy(max_retries=3, base_delay=0.5)
        assert [policy.delay_for(n) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]


class TestParseStructured:
    def test_plain_object(self):
        assert parse_structured('{"usps": ["a"]}', SUBPROMPTS["usp-generation"]) == {"usps": ["a"]}

    def test_markdown_fence(self):
        raw = 'Hier:\n```json\n{"narrative": "Text"}\n```'
        assert parse_structured(raw, SUBPROMPTS["narrative"]) == {"narrative": "Text"}

    def test_trailing_comma_is_repaired(self):
        raw = '{"usps": ["a", "b",],}'
        assert parse_structured(raw, SUBPROMPTS["usp-generation"]) == {"usps": ["a", "b"]}

    def test_not_json(self):
        with pytest.raises(InvalidGeneratedShape, match="Invalid JSON"):
            parse_structured("Leider kann ich das nicht.", SUBPROMPTS["usp-generation"])

    def test_missing_result_key(self):
        with pytest.raises(InvalidGeneratedShape, match="lacks 'usps'"):
            parse_structured('{"bullets": []}', SUBPROMPTS["usp-generation"])

    def test_array_instead_of_object(self):
        with pytest.raises(InvalidGeneratedShape):
            parse_structured('["a", "b"]', SUBPROMPTS["usp-generation"])


class TestExecuteSubprompt:
    @pytest.mark.asyncio
    async def test_success(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": NARRATIVE})
        trace = RequestTrace()

        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("narrative", context, trace)

        assert result.success
        assert result.data == NARRATIVE
        assert result.attempts == 1
        assert trace.subprompts["narrative"] == GenerationState.DONE
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried_with_backoff(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": (RateLimited("429"), RateLimited("429"), NARRATIVE)})

        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("narrative", context)

        assert result.success
        assert result.attempts == 3
        assert sleep_recorder.delays == [1.0, 2.0]
        assert fake.names() == ["narrative"] * 3

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": RateLimited("429")})
        orchestrator = _orchestrator(fake, sleep_recorder, retry=RetryPolicy(max_retries=2, base_delay=1.0))

        result = await orchestrator.execute_subprompt("narrative", context)

        assert not result.success
        assert "rate limited after 3 attempts" in result.error
        assert sleep_recorder.delays == [1.0, 2.0]
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_other_failures_are_not_retried(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": GenerationFailed("LLM returned empty response")})

        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("narrative", context)

        assert not result.success
        assert result.error == "LLM returned empty response"
        assert len(fake.calls) == 1
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_timeout_is_a_failure(self, fake_generator, sleep_recorder, hang, context):
        fake = fake_generator({"narrative": hang})
        trace = RequestTrace()

        result = await _orchestrator(fake, sleep_recorder, timeout=0.05).execute_subprompt(
            "narrative", context, trace
        )

        assert not result.success
        assert "timed out" in result.error
        assert len(fake.calls) == 1
        assert trace.subprompts["narrative"] == GenerationState.FAILED

    @pytest.mark.asyncio
    async def test_malformed_response(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"usp-generation": {"bullets": ["a"]}})

        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("usp-generation", context)

        assert not result.success
        assert "lacks 'usps'" in result.error
        assert result.attempts == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_failed_result(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": KeyError("choices")})

        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("narrative", context)

        assert not result.success
        assert "choices" in result.error

    @pytest.mark.asyncio
    async def test_unknown_subprompt(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({})
        result = await _orchestrator(fake, sleep_recorder).execute_subprompt("bogus", context)

        assert not result.success
        assert result.error == "Unknown subprompt: bogus"
        assert fake.calls == []

    @pytest.mark.asyncio
    async def test_base_prompt_is_prepended(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({"narrative": NARRATIVE, "safety-warnings": {"safetyNotice": "x"}})
        orchestrator = _orchestrator(fake, sleep_recorder)
        custom = _orchestrator(fake, sleep_recorder, base_prompt="BASIS")

        await orchestrator.execute_subprompt("narrative", context)
        await custom.execute_subprompt("safety-warnings", context)

        (_, default_system, user), (_, custom_system, _) = fake.calls
        assert default_system.startswith(BASE_SYSTEM_PROMPT + "\n\n")
        assert custom_system.startswith("BASIS\n\n")
        assert "XT-21700HP" in user


class TestExecuteMultiple:
    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, fake_generator, sleep_recorder, good_responses, hang, context):
        responses = dict(good_responses, **{"safety-warnings": hang})
        fake = fake_generator(responses)
        trace = RequestTrace()

        results = await _orchestrator(fake, sleep_recorder, timeout=0.05).execute_multiple(
            ALL_SUBPROMPTS, context, trace
        )

        assert set(results) == set(ALL_SUBPROMPTS)
        assert not results["safety-warnings"].success
        assert all(results[n].success for n in ALL_SUBPROMPTS if n != "safety-warnings")
        assert trace.state == GenerationState.DONE
        assert trace.subprompts["safety-warnings"] == GenerationState.FAILED

    @pytest.mark.asyncio
    async def test_subprompts_run_concurrently(self, fake_generator, sleep_recorder, good_responses, context):
        fake = fake_generator(good_responses, delay=0.01)

        results = await _orchestrator(fake, sleep_recorder).execute_multiple(ALL_SUBPROMPTS, context)

        assert all(r.success for r in results.values())
        assert fake.max_in_flight == len(ALL_SUBPROMPTS)

    @pytest.mark.asyncio
    async def test_all_failed(self, fake_generator, sleep_recorder, context):
        fake = fake_generator({})
        trace = RequestTrace()

        results = await _orchestrator(fake, sleep_recorder).execute_multiple(
            ["narrative", "usp-generation", "narrative"], context, trace
        )

        assert list(results) == ["narrative", "usp-generation"]
        assert trace.state == GenerationState.FAILED
