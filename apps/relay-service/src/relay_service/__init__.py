"""Relay service: real-time multilingual messaging relay.

Each sender writes once in their own language; every conversation member
receives the message translated (and, for voice, re-synthesized) into
their preferred language.
"""

__version__ = "0.1.0"
