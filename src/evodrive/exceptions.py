"""
Exceptions raised by evodrive.

Construction-time violations (bad topology, mismatched gene counts, too small
a population) are configuration errors and are raised immediately. Forward
passes with a wrongly sized input raise NodeCountError at call time.
"""


class EvodriveError(Exception):
    """Base class for all evodrive errors."""


class ConfigurationError(EvodriveError, ValueError):
    """A parameter or combination of parameters the caller has to fix."""


class TopologyError(ConfigurationError):
    """A network topology with fewer than two layers or a non-positive layer size."""


class WeightCountError(ConfigurationError):
    """The genome does not carry exactly one gene per network weight."""


class NodeCountError(EvodriveError, ValueError):
    """A layer received an input vector of the wrong length."""

    def __init__(self, message: str = ""):
        text = "Node count mismatch."
        if message:
            text = f"{text} - {message}"
        super().__init__(text)


class SelectionError(EvodriveError, RuntimeError):
    """Selection could not draw the genomes it needs from the population."""
