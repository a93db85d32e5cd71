"""polycalc -- input parsing for a sparse multivariate polynomial calculator."""

__version__ = "0.1.0"
