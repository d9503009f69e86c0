"""
Types shared between the forum server and its client.

Identifier wrappers and the request/response schemas exchanged over the wire.
"""

__version__ = "0.1.0"
