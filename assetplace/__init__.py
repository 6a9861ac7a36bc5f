"""
AssetPlace - Projection Package

Tracks a personal balance sheet (assets, liabilities, mortgages) and
projects it forward year by year under configurable economic assumptions.

DESIGN PRINCIPLES:
1. Calculations are pure: same inputs, same outputs
2. Missing data falls back to documented defaults, never to errors
3. Nominal growth first, inflation discounting last
4. Logging happens at the boundaries, not inside the maths
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "AssetPlace Team"
