"""Result codes returned by fetch and catalogue operations."""

from enum import Enum


class ResponseCode(Enum):
    """Closed set of outcomes for every fetching or mutating operation.

    Expected conditions (a failed fetch, a duplicate add, removing an unknown
    registry) are reported with one of these codes instead of an exception.
    """

    FETCH_COMPLETE = "fetch_complete"
    FETCH_ERROR = "fetch_error"
    REGISTRY_ADDED = "registry_added"
    REGISTRY_ALREADY_PRESENT = "registry_already_present"
    REGISTRY_REMOVED = "registry_removed"
    REGISTRY_NOT_FOUND = "registry_not_found"
