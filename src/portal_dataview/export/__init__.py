"""
Export Package - Save the Current View.

    - to_csv: Records as CSV with caller-chosen columns
    - to_json: Payload wrapped with export metadata
    - export_view: Current page of a ViewResult as CSV or JSON
"""

from portal_dataview.export.exporters import export_view, to_csv, to_json

__all__ = ["export_view", "to_csv", "to_json"]
