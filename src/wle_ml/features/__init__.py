from .reducer import FeatureReducer, ReductionReport

__all__ = ["FeatureReducer", "ReductionReport"]
