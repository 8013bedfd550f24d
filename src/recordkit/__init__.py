"""recordkit — generic record service layer.

Validation, audit-field enrichment, identifier assignment and paging
applied once for every record type, in front of a pluggable storage
collaborator.
"""

__version__ = "0.1.0"
