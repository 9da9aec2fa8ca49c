"""
Error kinds raised by the store and the report generator.
"""


class ClinicalCopilotError(Exception):
    """Base error for the service."""
    pass


class ConfigurationError(ClinicalCopilotError):
    """A credential or setting required for the operation is missing."""
    pass


class StoreError(ClinicalCopilotError):
    """The underlying database operation failed."""
    pass


class GenerationError(ClinicalCopilotError):
    """The AI call failed, returned nothing, or returned an unusable payload."""
    pass
