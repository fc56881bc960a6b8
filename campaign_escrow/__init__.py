"""
Campaign Escrow - Source Package

An escrow ledger for time-boxed fundraising campaigns. Pledges are held in
custody and released to the creator only if the goal is met by the deadline;
otherwise each contributor reclaims their own pledge.

DESIGN PRINCIPLES:
1. Check every precondition before touching state
2. Change local state before any outbound transfer, roll back if it fails
3. One lock per campaign; no operation observes a half-applied change
4. Every operation is audited
5. The asset ledger is swappable
"""

__version__ = "1.0.0"
