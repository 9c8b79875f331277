"""Domain exceptions shared by every component.

Route handlers translate these into HTTP status codes:
``ValidationError`` → 400 and ``NotFoundError`` → 404. Messages carried
by ``ValidationError`` are user-safe and returned verbatim.
"""


class ButjiError(Exception):
    """Base class for domain errors."""


class ValidationError(ButjiError):
    """Malformed or missing input."""


class NotFoundError(ButjiError):
    """No row matches the requested identifier."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")
