"""
Analytics Exceptions
Custom exceptions for the analytics engine.
"""

from typing import Optional


class DataFetchError(Exception):
    """
    Raised when source records cannot be retrieved.

    Aborts the whole report; no partial analytics are produced.
    """

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ):
        self.message = message
        self.collection = collection
        self.tenant_id = tenant_id
        super().__init__(self.message)
