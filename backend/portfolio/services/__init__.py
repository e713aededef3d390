"""Services Layer — orchestrates storage IO around the pure core.

Invariants:
    - Services never build HTTP responses; they return data or raise PortfolioError
"""
