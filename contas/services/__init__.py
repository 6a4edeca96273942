"""
Account use cases.

Each service orchestrates the backend collaborator and the session store to
implement the screen-level rules (edit profile, change password, delete
account, register clientes). Presentation code should call these services
instead of talking to the backend or mutating the session directly.
"""
