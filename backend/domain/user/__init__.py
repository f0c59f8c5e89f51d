"""User domain module.

Username/email/password accounts. A user is bound to the session token
it currently owns; logging in moves the user and the session's meals to
a new token.
"""
