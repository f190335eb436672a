"""
Demo data for the admin panel.

This package contains raw backend-shaped records used by DemoListService for
development, testing and demonstrations without a running backend.

Modules:
- demo_records: ticket purchases, teams, payments with refunds, tournaments
  and registrations
"""
