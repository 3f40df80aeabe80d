"""Exception hierarchy for the analysis pipeline.

Only ConfigurationError and InputError ever reach an HTTP caller. VendorError and
ExtractionError are raised inside the pipeline and recovered by fallback synthesis.
"""


class SEOToolboxError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SEOToolboxError):
    """A required credential or setting is missing. Maps to a 5xx response."""


class InputError(SEOToolboxError):
    """The analysis subject or a tool parameter is missing or invalid. Maps to a 4xx response."""


class VendorError(SEOToolboxError):
    """The generation backend failed: network, auth, quota, timeout or empty output."""

    def __init__(self, vendor: str, message: str):
        super().__init__(f"{vendor}: {message}")
        self.vendor = vendor


class ExtractionError(SEOToolboxError):
    """No usable JSON object could be recovered from the vendor's text."""
