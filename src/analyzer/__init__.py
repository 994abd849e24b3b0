"""SentinelSIEM analyzer — numbers behind the overview charts.

Modules
───────
  aggregates — severity distribution, daily counts, threats by source,
               overview stat totals
"""
