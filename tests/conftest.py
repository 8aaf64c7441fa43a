from datetime import timedelta

import pytest

from stepquery import (
    Attachment,
    Envelope,
    Group,
    Query,
    Status,
    StepMatchArgument,
    StepMatchArgumentsList,
    TestCase,
    TestStep,
    TestStepFinished,
    TestStepResult,
)


def make_test_case(test_case_id: str, pickle_id: str, *step_ids: tuple[str, str]) -> Envelope:
    """Build a test case envelope from (test_step_id, pickle_step_id) pairs."""
    return Envelope(
        test_case=TestCase(
            id=test_case_id,
            pickle_id=pickle_id,
            test_steps=tuple(TestStep(id=step_id, pickle_step_id=pickle_step_id) for step_id, pickle_step_id in step_ids),
        )
    )


def finished(test_step_id: str, status: Status, milliseconds: int = 0) -> Envelope:
    return Envelope(
        test_step_finished=TestStepFinished(
            test_step_id=test_step_id,
            test_step_result=TestStepResult(status=status, duration=timedelta(milliseconds=milliseconds)),
        )
    )


def attached(test_step_id: str, body: str) -> Envelope:
    return Envelope(attachment=Attachment(test_step_id=test_step_id, body=body))


@pytest.fixture
def query() -> Query:
    return Query()


@pytest.fixture
def match_arguments() -> tuple[StepMatchArgumentsList, ...]:
    return (
        StepMatchArgumentsList(
            step_match_arguments=(
                StepMatchArgument(
                    group=Group(start=6, value="42", children=()),
                    parameter_type_name="int",
                ),
            )
        ),
    )


@pytest.fixture
def two_pickles(query: Query) -> Query:
    """Two pickles, two steps each, every step finished once."""
    query.update(make_test_case("tc-1", "pickle-1", ("ts-1", "ps-1"), ("ts-2", "ps-2")))
    query.update(make_test_case("tc-2", "pickle-2", ("ts-3", "ps-3"), ("ts-4", "ps-4")))
    query.update(finished("ts-1", Status.PASSED, 5))
    query.update(finished("ts-2", Status.FAILED, 7))
    query.update(finished("ts-3", Status.PASSED, 1))
    query.update(finished("ts-4", Status.SKIPPED))
    return query
