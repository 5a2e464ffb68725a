"""
Report rendering: charts, narrative Markdown and the orchestrating
BenfordReport.
"""
from .analyzer import BenfordReport

__all__ = [
    "BenfordReport",
]
