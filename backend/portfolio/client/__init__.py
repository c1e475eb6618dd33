"""
Client data layer: contract-validated API calls with a collection cache
"""
from portfolio.client.cache import QueryCache  # noqa: F401
from portfolio.client.client import ApiError, PortfolioClient  # noqa: F401
