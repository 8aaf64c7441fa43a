from collections.abc import Iterable  # noqa: N999

from matplotlib.ticker import EngFormatter
from robot.api import logger
from robot.api.deco import keyword, library

from stepquery.models import Attachment, Envelope, Record, Status, StepMatchArgumentsList, TestStepResult
from stepquery.query import Query


@library(scope="GLOBAL", version="0.1.0")
class StepQueryLib:
    """Robot Framework library for recording test run events and querying step results."""

    LOGGER_PREFIX = "[StepQuery Lib] "

    def __init__(self, log_events: bool = False):
        self.log_events = log_events
        self.query = Query()

    @keyword("Reset Step Query")
    def reset_step_query(self):
        self.query = Query()
        logger.info(f"{self.LOGGER_PREFIX}Started a fresh step query")

    @keyword("Record Envelope")
    def record_envelope(self, envelope: Envelope | Record):
        if self.log_events:
            logger.info(f"{self.LOGGER_PREFIX}Recording {envelope}")
        self.query.update(envelope)

    @keyword("Record Envelopes")
    def record_envelopes(self, envelopes: Iterable):
        for envelope in envelopes:
            self.record_envelope(envelope)

    @keyword("Get Pickle Step Test Step Results")
    def get_pickle_step_test_step_results(self, *pickle_step_ids: str) -> list[TestStepResult]:
        return self.query.get_pickle_step_test_step_results(list(pickle_step_ids))

    @keyword("Get Pickle Test Step Results")
    def get_pickle_test_step_results(self, *pickle_ids: str) -> list[TestStepResult]:
        return self.query.get_pickle_test_step_results(list(pickle_ids))

    @keyword("Get Worst Test Step Result")
    def get_worst_test_step_result(self, test_step_results: list) -> TestStepResult:
        return self.query.get_worst_test_step_result(list(test_step_results))

    @keyword("Get Pickle Step Attachments")
    def get_pickle_step_attachments(self, *pickle_step_ids: str) -> list[Attachment]:
        return self.query.get_pickle_step_attachments(list(pickle_step_ids))

    @keyword("Get Step Match Arguments Lists")
    def get_step_match_arguments_lists(self, pickle_step_id: str) -> tuple[StepMatchArgumentsList, ...]:
        return self.query.get_step_match_arguments_lists(pickle_step_id)

    @keyword("Worst Status Should Be")
    def worst_status_should_be(
        self,
        expected_status: str,
        *pickle_ids: str,
        error_message: str | None = None,
    ):
        expected = Status.from_name(expected_status)
        worst = self.query.get_worst_test_step_result(self.query.get_pickle_test_step_results(list(pickle_ids)))

        error_message = f" {error_message}" if error_message else ""

        if worst.status != expected:
            duration_str = EngFormatter(unit="s")(worst.duration.total_seconds())
            raise AssertionError(
                f"Worst status check failed: {worst.status.name} != {expected.name} "
                f"(worst result took {duration_str}).{error_message}"
            )
        logger.info(f"{self.LOGGER_PREFIX}Worst status of {list(pickle_ids)}: {worst.status.name}")
