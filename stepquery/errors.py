class StepQueryError(Exception):
    """Base class for errors raised by stepquery."""


class UnknownStepReference(StepQueryError, LookupError):
    """
    An event referenced a test step that no earlier test case declared.

    Raised by Query.update before any index is touched, so the query is left
    exactly as it was before the offending event.

    Attributes:
        test_step_id: The undeclared test step id.
        event_kind: Envelope field that carried the reference.
    """

    def __init__(self, test_step_id: str, event_kind: str = ""):
        self.test_step_id = test_step_id
        self.event_kind = event_kind
        where = f" (referenced by {event_kind})" if event_kind else ""
        super().__init__(f"Test step '{test_step_id}' was never declared by a test case{where}")
