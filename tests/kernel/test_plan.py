"""Tests for the plan-then-commit helper (erp_kernel.domain.plan)."""

import pytest

from erp_kernel.domain.plan import ChangePlan


def _fail(exc):
    def _raise():
        raise exc
    return _raise


class TestChangePlan:

    def test_steps_run_in_registration_order_after_checks(self):
        calls = []
        plan = ChangePlan("ordering")
        plan.stage("first", lambda: calls.append("step-1"))
        plan.check("check", lambda: calls.append("check"))
        plan.stage("second", lambda: calls.append("step-2"))

        plan.commit()

        assert calls == ["check", "step-1", "step-2"]

    def test_failing_check_runs_no_step(self):
        applied = []
        plan = ChangePlan("reject")
        plan.check("ok", lambda: None)
        plan.stage("mutate", lambda: applied.append(1))
        plan.check("bad", _fail(LookupError("missing")))

        with pytest.raises(LookupError, match="missing"):
            plan.commit()

        assert applied == []

    def test_later_checks_do_not_run_after_first_failure(self):
        seen = []
        plan = ChangePlan("short-circuit")
        plan.check("bad", _fail(ValueError("first")))
        plan.check("never", lambda: seen.append("second"))

        with pytest.raises(ValueError):
            plan.validate()
        assert seen == []

    def test_commit_twice_rejected(self):
        plan = ChangePlan("once")
        plan.commit()
        with pytest.raises(RuntimeError, match="already committed"):
            plan.commit()

    def test_check_and_stage_are_chainable(self):
        plan = ChangePlan("chain").check("a", lambda: None).stage("b", lambda: None)
        assert plan.step_count == 1

    def test_failed_check_logged(self, captured_logs):
        plan = ChangePlan("logged")
        plan.check("stock available", _fail(ValueError("short")))

        with pytest.raises(ValueError):
            plan.commit()

        failures = [r for r in captured_logs() if r["message"] == "plan_check_failed"]
        assert failures[0]["check"] == "stock available"
        assert failures[0]["level"] == "WARNING"
