class EstimationError(Exception):
    """Base class for everything the estimation engine raises."""


class PricingError(EstimationError):
    pass


class MissingPricingData(PricingError):
    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__(f"Price data unavailable for '{product_name}'")


class PackCombinationUnsatisfiable(PricingError):
    def __init__(self, required_quantity):
        self.required_quantity = required_quantity
        super().__init__(
            f"Pack combination not found for full quantity ({required_quantity})"
        )


class MissingCoverageData(EstimationError):
    # Resolved locally by category defaults; kept for callers that want strict lookups.
    pass


class InvalidConfiguration(EstimationError):
    def __init__(self, message, errors=None):
        self.errors = errors or []
        super().__init__(message)
