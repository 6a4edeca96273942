"""
Contas: customer registration and account self-service.

The client side lives in ``contas.domain`` (validators, models, errors) and
``contas.services`` (session store, account state machine, registration
flow). ``contas.app`` exposes a small reference REST backend used for local
development and end-to-end tests.
"""
