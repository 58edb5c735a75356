from __future__ import annotations


class JobCostError(Exception):
    """Base class for errors raised by jobcost."""


class ProjectNotFoundError(JobCostError, LookupError):
    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class UnknownReferenceError(JobCostError, LookupError):
    """A new record points at a worker, material or task that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind.capitalize()} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class ValidationError(JobCostError, ValueError):
    """Mutation input rejected before it reaches the record store."""


class DatasetError(JobCostError):
    """A dataset file could not be read into a record store."""
