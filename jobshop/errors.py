# jobshop/errors.py


class JobShopError(Exception):
    """Base class for errors raised by the service layer."""


class NotFoundError(JobShopError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidInputError(JobShopError):
    """Rejected before anything is written to the store."""


class StoreDataError(JobShopError):
    """A row came back from the store with a value we don't recognise."""
