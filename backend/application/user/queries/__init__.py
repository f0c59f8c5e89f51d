"""CQRS Queries for the user registry."""

from .get_user_summary import GetUserSummaryQuery, GetUserSummaryQueryHandler, UserSummary

__all__ = ["GetUserSummaryQuery", "GetUserSummaryQueryHandler", "UserSummary"]
