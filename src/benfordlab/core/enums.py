# benfordlab/core/enums.py

from enum import Enum

class Conformity(str, Enum):
    CLOSE = "close conformity"
    ACCEPTABLE = "acceptable conformity"
    MARGINAL = "marginally acceptable conformity"
    NONCONFORMITY = "nonconformity"

class Verdict(str, Enum):
    CONSISTENT = "consistent with the law"
    REJECTED = "rejected"

__all__ = [
    "Conformity",
    "Verdict",
]
