"""Error taxonomy for the valuation request lifecycle.

Only ``ValidationError`` and ``MethodNotAllowedError`` are raised before an
external call is made. Everything after validation is caught by the single
outer boundary in the router and surfaced as a generic 500.
"""


class ValuationError(Exception):
    """Base class for errors raised while handling a valuation request."""


class ValidationError(ValuationError):
    """Required input is missing, empty or not usable. Surfaced as 400."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"missing or invalid fields: {', '.join(missing)}")


class MethodNotAllowedError(ValuationError):
    """Wrong HTTP verb on the valuation route. Surfaced as 405."""


class UpstreamModelError(ValuationError):
    """The language-model call failed or its reply was not a JSON object."""


class EmailDeliveryError(ValuationError):
    """The email provider reported a failure. Logged and swallowed."""
