"""
Calculator builder: admin console backend for cleaning-company booking calculators.
"""

__version__ = "1.0.0"
