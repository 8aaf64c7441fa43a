from stepquery.errors import StepQueryError, UnknownStepReference
from stepquery.models import (
    Attachment,
    Envelope,
    Group,
    Status,
    StepMatchArgument,
    StepMatchArgumentsList,
    TestCase,
    TestStep,
    TestStepFinished,
    TestStepResult,
)
from stepquery.query import Query
from stepquery.StepQueryLib import StepQueryLib

__all__ = [
    "Query",
    "StepQueryLib",
    "Envelope",
    "TestCase",
    "TestStep",
    "TestStepFinished",
    "TestStepResult",
    "Attachment",
    "Group",
    "StepMatchArgument",
    "StepMatchArgumentsList",
    "Status",
    "StepQueryError",
    "UnknownStepReference",
]
