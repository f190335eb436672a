"""
Hoops Admin: admin list views for a youth-basketball club platform.

This package provides the data-access and view layer behind the club's admin
tables (ticket purchases, internal teams, refunds and tournament
registrations), talking to the club REST backend and rendering with Dash.

Subpackages:
- components: Dash renderers for list views
- models: View-models, filter/pagination state and record normalizers
- services: Data access layer (REST and demo implementations)
- data: Static demo fixtures

Main entry points:
- controller.ListController: the filtered list controller
- app.main(): Start the development server
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
