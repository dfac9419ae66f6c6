"""taxplan: household income-tax estimator and estimated-payment planner."""

__version__ = "0.1.0"
