"""
Governor App - Multi-Network Execution Governor

An autonomous decision loop that watches several EVM networks, sizes a
bounded strike from each account's balance and fee conditions, gates it on
a learned trust score for the originating signal source, and learns from
the confirmed outcome.
"""

__version__ = "204.7"
__author__ = "Governor Team"
