from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum


class Status(IntEnum):
    """Test step status, ordered by severity (higher is worse)."""

    UNKNOWN = 0
    PASSED = 1
    SKIPPED = 2
    PENDING = 3
    UNDEFINED = 4
    AMBIGUOUS = 5
    FAILED = 6

    @classmethod
    def from_name(cls, name: "str | Status") -> "Status":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown status '{name}'. Expected one of: {', '.join(s.name for s in cls)}") from None


@dataclass(frozen=True)
class Record:
    __test__ = False  # Keep pytest from collecting Test* records


@dataclass(frozen=True)
class TestStepResult(Record):
    status: Status = Status.UNKNOWN
    duration: timedelta = field(default_factory=timedelta)
    message: str = ""
    will_be_retried: bool = False


@dataclass(frozen=True)
class Group(Record):
    start: int = None
    value: str = None
    children: tuple = ()  # Nested capture groups


@dataclass(frozen=True)
class StepMatchArgument(Record):
    group: Group = field(default_factory=Group)
    parameter_type_name: str = ""


@dataclass(frozen=True)
class StepMatchArgumentsList(Record):
    step_match_arguments: tuple = ()


@dataclass(frozen=True)
class TestStep(Record):
    id: str = ""
    pickle_step_id: str = ""  # Empty for hook steps
    step_definition_ids: tuple = ()
    step_match_arguments_lists: tuple = ()
    hook_id: str = ""


@dataclass(frozen=True)
class TestCase(Record):
    id: str = ""
    pickle_id: str = ""
    test_steps: tuple = ()


@dataclass(frozen=True)
class TestStepFinished(Record):
    test_step_id: str = ""
    test_step_result: TestStepResult = field(default_factory=TestStepResult)
    test_case_started_id: str = ""
    timestamp: datetime = None


@dataclass(frozen=True)
class Attachment(Record):
    test_step_id: str = ""
    body: str = ""
    media_type: str = "text/plain"
    content_encoding: str = "IDENTITY"
    test_case_started_id: str = ""
    file_name: str = ""


@dataclass(frozen=True)
class Envelope:
    """A single event. Exactly one payload field is populated."""

    test_case: TestCase = None
    test_step_finished: TestStepFinished = None
    attachment: Attachment = None

    def __post_init__(self):
        populated = [name for name in ("test_case", "test_step_finished", "attachment") if getattr(self, name) is not None]
        if len(populated) != 1:
            raise ValueError(f"Envelope must carry exactly one payload, got {len(populated)}: {populated}")

    @classmethod
    def wrap(cls, payload: Record) -> "Envelope":
        if isinstance(payload, TestCase):
            return cls(test_case=payload)
        if isinstance(payload, TestStepFinished):
            return cls(test_step_finished=payload)
        if isinstance(payload, Attachment):
            return cls(attachment=payload)
        raise ValueError(f"Cannot wrap {type(payload).__name__} in an Envelope")

    @property
    def payload(self) -> Record:
        return self.test_case or self.test_step_finished or self.attachment


def skipped_result() -> TestStepResult:
    return TestStepResult(status=Status.SKIPPED, duration=timedelta(0))


def undefined_result() -> TestStepResult:
    return TestStepResult(status=Status.UNDEFINED, duration=timedelta(0))
