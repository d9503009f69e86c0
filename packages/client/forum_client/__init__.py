"""
Client side of the forum: request dispatch, the Loadable state machine and
the components rendered from it.
"""

__version__ = "0.1.0"
