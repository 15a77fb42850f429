"""Errors raised by the chart engine."""


class PersonNotFoundError(ValueError):
    """Requested root person is not in the loaded person set."""

    def __init__(self, person_id: str):
        super().__init__(f"Person with ID {person_id} not found")
        self.person_id = person_id


class DatasetError(RuntimeError):
    """Dataset file could not be read or validated."""
