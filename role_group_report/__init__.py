"""
Role Group Membership Report
============================
A read-only Microsoft Entra ID reporting utility. Finds groups by display-name
prefix and role suffix and reports their user members as CSV and HTML, for
license reconciliation.

WARNING: This tool operates in STRICT READ-ONLY mode.
         No write operations will be performed against the directory.
"""

__version__ = "1.0.0"
__mode__ = "READ-ONLY"
