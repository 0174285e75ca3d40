"""Exceptions raised by the succession engine."""


class SuccessionError(Exception):
    """Base class for succession engine errors."""


class NotFoundError(SuccessionError):
    """An entity id did not resolve."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class DuplicateMemberError(SuccessionError):
    """Employee is already a member of the talent pool."""

    def __init__(self, pool_id: str, employee_id: str):
        self.pool_id = pool_id
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} is already in talent pool {pool_id}")


class DuplicateSuccessorError(SuccessionError):
    """Employee is already a successor candidate for the role."""

    def __init__(self, role_id: str, employee_id: str):
        self.role_id = role_id
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} is already a successor for role {role_id}")


class VersionConflictError(SuccessionError):
    """A document changed between read and write."""

    def __init__(self, collection: str, doc_id: str, expected: int, actual: int | None):
        self.collection = collection
        self.doc_id = doc_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Version conflict on {collection}/{doc_id}: expected {expected}, found {actual}"
        )
