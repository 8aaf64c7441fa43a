from robot.api import logger

from stepquery.errors import UnknownStepReference
from stepquery.models import (
    Attachment,
    Envelope,
    Record,
    StepMatchArgumentsList,
    TestCase,
    TestStep,
    TestStepFinished,
    TestStepResult,
    skipped_result,
    undefined_result,
)
from stepquery.multimap import ArrayMultimap, StrictMap


class Query:
    """
    Incremental index over the events of one test run.

    Feed envelopes through update() in arrival order, then ask for results
    and attachments by pickle or pickle step id.
    """

    LOGGER_PREFIX = "[StepQuery] "

    def __init__(self):
        self.test_step_results_by_pickle_id: ArrayMultimap[str, TestStepResult] = ArrayMultimap()
        self.test_step_results_by_pickle_step_id: ArrayMultimap[str, TestStepResult] = ArrayMultimap()
        self.attachments_by_pickle_step_id: ArrayMultimap[str, Attachment] = ArrayMultimap()

        self.test_step_by_id: StrictMap[str, TestStep] = StrictMap()
        self.pickle_id_by_test_step_id: StrictMap[str, str] = StrictMap()
        self.pickle_step_id_by_test_step_id: StrictMap[str, str] = StrictMap()
        self.step_match_arguments_lists_by_pickle_step_id: StrictMap[str, tuple[StepMatchArgumentsList, ...]] = StrictMap()

    def update(self, envelope: Envelope | Record) -> None:
        if not isinstance(envelope, Envelope):
            envelope = Envelope.wrap(envelope)

        if envelope.test_case is not None:
            self._add_test_case(envelope.test_case)
        elif envelope.test_step_finished is not None:
            self._add_test_step_finished(envelope.test_step_finished)
        elif envelope.attachment is not None:
            self._add_attachment(envelope.attachment)

    def _add_test_case(self, test_case: TestCase):
        for test_step in test_case.test_steps:
            self.test_step_by_id.set(test_step.id, test_step)
            self.pickle_id_by_test_step_id.set(test_step.id, test_case.pickle_id)
            self.pickle_step_id_by_test_step_id.set(test_step.id, test_step.pickle_step_id)
            self.step_match_arguments_lists_by_pickle_step_id.set(
                test_step.pickle_step_id,
                test_step.step_match_arguments_lists,
            )
        logger.debug(f"{self.LOGGER_PREFIX}Test case '{test_case.id}' declared {len(test_case.test_steps)} step(s) for pickle '{test_case.pickle_id}'")

    def _add_test_step_finished(self, test_step_finished: TestStepFinished):
        test_step_id = test_step_finished.test_step_id
        # Resolve both ids before appending anything
        pickle_id = self._resolve(self.pickle_id_by_test_step_id, test_step_id, "test_step_finished")
        pickle_step_id = self._resolve(self.pickle_step_id_by_test_step_id, test_step_id, "test_step_finished")

        result = test_step_finished.test_step_result
        self.test_step_results_by_pickle_id.put(pickle_id, result)
        self.test_step_results_by_pickle_step_id.put(pickle_step_id, result)
        logger.debug(f"{self.LOGGER_PREFIX}Test step '{test_step_id}' finished with {result.status.name}")

    def _add_attachment(self, attachment: Attachment):
        pickle_step_id = self._resolve(self.pickle_step_id_by_test_step_id, attachment.test_step_id, "attachment")
        self.attachments_by_pickle_step_id.put(pickle_step_id, attachment)
        logger.debug(f"{self.LOGGER_PREFIX}Attachment ({attachment.media_type}) recorded for test step '{attachment.test_step_id}'")

    def _resolve(self, index: StrictMap[str, str], test_step_id: str, event_kind: str) -> str:
        try:
            return index.get(test_step_id)
        except KeyError:
            logger.error(f"{self.LOGGER_PREFIX}Unknown test step '{test_step_id}' in {event_kind} event")
            raise UnknownStepReference(test_step_id, event_kind) from None

    def get_pickle_step_test_step_results(self, pickle_step_ids: list[str]) -> list[TestStepResult]:
        """
        Get all the results for multiple pickle steps.

        With no pickle step ids there is nothing to run, which reads as a
        single SKIPPED result.
        """
        if not pickle_step_ids:
            return [skipped_result()]
        return [result for pickle_step_id in pickle_step_ids for result in self.test_step_results_by_pickle_step_id.get(pickle_step_id)]

    def get_pickle_test_step_results(self, pickle_ids: list[str]) -> list[TestStepResult]:
        """
        Get all the results for multiple pickles.

        With no pickle ids the answer is a single UNDEFINED result, not the
        SKIPPED one used for pickle steps.
        """
        if not pickle_ids:
            return [undefined_result()]
        return [result for pickle_id in pickle_ids for result in self.test_step_results_by_pickle_id.get(pickle_id)]

    def get_worst_test_step_result(self, test_step_results: list[TestStepResult]) -> TestStepResult:
        """
        Get the most severe result. Of equally severe results the earliest wins.
        """
        ranked = sorted(test_step_results, key=lambda result: result.status, reverse=True)
        return ranked[0] if ranked else skipped_result()

    def get_pickle_step_attachments(self, pickle_step_ids: list[str]) -> list[Attachment]:
        return [attachment for pickle_step_id in pickle_step_ids for attachment in self.attachments_by_pickle_step_id.get(pickle_step_id)]

    def get_step_match_arguments_lists(self, pickle_step_id: str) -> tuple[StepMatchArgumentsList, ...]:
        return self.step_match_arguments_lists_by_pickle_step_id.get(pickle_step_id, ())

    def get_test_step(self, test_step_id: str) -> TestStep:
        try:
            return self.test_step_by_id.get(test_step_id)
        except KeyError:
            raise UnknownStepReference(test_step_id) from None

    def get_pickle_status(self, pickle_id: str) -> TestStepResult:
        return self.get_worst_test_step_result(self.get_pickle_test_step_results([pickle_id]))
