"""
benfordlab: leading-digit law analysis of country/year panel data.

Use 'benfordlab --help' for the command line, or import the core directly:

    from benfordlab.core.goodness_of_fit import simulate_distribution, estimate_p_value
"""

__version__ = "0.3.0"
