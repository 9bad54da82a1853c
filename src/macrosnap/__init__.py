"""
macrosnap - Multi-source macro and market indicator snapshots.

Queries several independent data providers (FRED, Alpha Vantage, GoldAPI,
CoinCap, Frankfurter), reconciles their formats and reliability, and writes one
normalized JSON snapshot for downstream dashboards.
"""

__version__ = "0.1.0"
