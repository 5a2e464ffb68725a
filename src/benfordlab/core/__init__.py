"""
Core digit-law computations: digit extraction, the law model, empirical
frequency tables and the Monte Carlo goodness-of-fit engine.
"""
