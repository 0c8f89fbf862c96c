"""
TMS - a small transportation-management backend.

Role-gated CRUD over an in-memory shipment collection, with a
filter -> sort -> paginate query pipeline for list reads.
"""

__version__ = "0.1.0"
