"""SentinelSIEM monitor — the record-table pipeline behind every tab.

Modules
───────
  filters    — per-field predicates, conjunctive FilterSet
  sorting    — single active sort key per table
  paginator  — fixed page size, clamped page numbers
  table      — RecordTable: filter → sort → paginate over a working collection
  specs      — per-tab TableSpec (realtime, events, incidents, rawlogs)
  live       — LiveAppendChannel, the owned periodic record feed
  frames     — records → pandas DataFrame for display
  cli        — argparse entry-point printing a table page
"""
