"""Unit tests for the step pipeline: Outcome, ExecutionContext and run_steps."""

from dataclasses import dataclass, field

import pytest

from stitch_cli.pipeline import (
    ErrorCode,
    ExecutionContext,
    Outcome,
    PipelineError,
    Step,
    require,
    run_steps,
)

pytestmark = pytest.mark.pipeline


@dataclass
class RecordingContext(ExecutionContext):
    ran: list[str] = field(default_factory=list)


class RecordingStep(Step[RecordingContext]):
    """Step that records its id and optionally finishes the context."""

    def __init__(self, id: str, applies: bool = True, finish_with: Outcome | None = None):
        self.id = id
        self.name = id
        self.applies = applies
        self.finish_with = finish_with

    def should_run(self, context: RecordingContext) -> bool:
        return self.applies

    async def run(self, context: RecordingContext) -> None:
        context.ran.append(self.id)
        if self.finish_with is not None:
            context.finish(self.finish_with)


class TestOutcome:
    def test_ok(self):
        outcome = Outcome.ok({"a": 1})
        assert outcome.success is True
        assert outcome.data == {"a": 1}
        assert outcome.error is None

    def test_fail(self):
        outcome = Outcome.fail(ErrorCode.FETCH_FAILED, "boom")
        assert outcome.success is False
        assert outcome.data is None
        assert outcome.error.code == ErrorCode.FETCH_FAILED
        assert outcome.error.message == "boom"
        assert outcome.error.recoverable is False

    def test_to_dict(self):
        assert Outcome.ok([1]).to_dict() == {"success": True, "data": [1]}
        assert Outcome.fail(ErrorCode.INVALID_ARGS, "bad").to_dict() == {
            "success": False,
            "error": {"code": "INVALID_ARGS", "message": "bad", "recoverable": False},
        }

    def test_success_with_error_rejected(self):
        with pytest.raises(ValueError):
            Outcome(success=True, error=Outcome.fail(ErrorCode.INVALID_ARGS, "x").error)

    def test_failure_without_error_rejected(self):
        with pytest.raises(ValueError):
            Outcome(success=False)


class TestExecutionContext:
    def test_finish_sets_result_once(self):
        context = ExecutionContext()
        assert not context.finished

        context.finish(Outcome.ok(1))
        assert context.finished
        assert context.result.data == 1

        with pytest.raises(PipelineError):
            context.finish(Outcome.ok(2))
        assert context.result.data == 1

    def test_outcome_requires_result(self):
        context = ExecutionContext()

        with pytest.raises(PipelineError, match="No step produced a result"):
            context.outcome

        context.finish(Outcome.fail(ErrorCode.FETCH_FAILED, "boom"))
        assert context.outcome.error.message == "boom"

    def test_require(self):
        assert require([], "screens") == []
        with pytest.raises(PipelineError, match="Pipeline state not set: screens"):
            require(None, "screens")


class TestRunSteps:
    @pytest.mark.asyncio
    async def test_runs_in_order_until_result(self):
        context = RecordingContext()
        steps = [
            RecordingStep("a"),
            RecordingStep("b"),
            RecordingStep("c", finish_with=Outcome.ok("done")),
            RecordingStep("d", finish_with=Outcome.ok("never")),
        ]

        result = await run_steps(steps, context)

        assert result is context
        assert context.ran == ["a", "b", "c"]
        assert context.result.data == "done"

    @pytest.mark.asyncio
    async def test_skips_steps_that_do_not_apply(self):
        context = RecordingContext()
        steps = [
            RecordingStep("a", applies=False),
            RecordingStep("b", finish_with=Outcome.ok(None)),
        ]

        await run_steps(steps, context)

        assert context.ran == ["b"]

    @pytest.mark.asyncio
    async def test_failure_short_circuits(self):
        context = RecordingContext()
        failure = Outcome.fail(ErrorCode.FETCH_FAILED, "nope")
        steps = [RecordingStep("a", finish_with=failure), RecordingStep("b")]

        await run_steps(steps, context)

        assert context.ran == ["a"]
        assert context.result is failure

    @pytest.mark.asyncio
    async def test_no_result_raises(self):
        context = RecordingContext()
        steps = [RecordingStep("a"), RecordingStep("b", applies=False)]

        with pytest.raises(PipelineError, match="No step produced a result"):
            await run_steps(steps, context)

        assert context.ran == ["a"]

    @pytest.mark.asyncio
    async def test_empty_pipeline_raises(self):
        with pytest.raises(PipelineError):
            await run_steps([], RecordingContext())

    def test_step_repr(self):
        assert repr(RecordingStep("fetch")) == "<RecordingStep id='fetch'>"
