"""
CareerDesk — list screens for a career-services platform.

Jobs, companies, applications, mentors, mentorship sessions and free
resources are shown through one reusable tabular data view (search, filters,
sorting, paging, row actions, delete confirmation) built on Reflex. Records
live in the managed backend; CareerDesk only reads pages of them and asks the
backend to delete rows once a user confirms.
"""

__version__ = "1.0.0"
__all__ = ["engine", "ui", "admin", "records"]
