"""Exceptions raised by the seller performance pipeline.

Everything here is raised before aggregation begins. Unknown seller ids and
unknown skus are skipped by the aggregator, not raised.
"""


class SalesPipelineError(Exception):
    """Base class for all pipeline errors."""


class InvalidInput(SalesPipelineError, ValueError):
    """The dataset is missing or one of its collections is empty or malformed."""


class MissingOptions(SalesPipelineError, TypeError):
    """No options object was supplied."""


class MissingStrategy(SalesPipelineError, TypeError):
    """A revenue or bonus strategy is absent or not callable."""


class ConfigError(SalesPipelineError, ValueError):
    """Configuration file or profile could not be loaded."""
