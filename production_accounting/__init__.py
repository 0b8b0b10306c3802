"""
Production accounting engine: standardization of gross well readings and
allocation of facility totals back to wells.
"""

__version__ = "0.1.0"
