"""
Ingestion layer — monthly series sources.

Submodules:
  series_csv  — CSV import parser for monthly metric tables
  sample_data — built-in five-month demo series
"""
