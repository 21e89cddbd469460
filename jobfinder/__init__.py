"""Job listing client package.

The package is structured around one owned store object:
- `models.py` defines the job record and the persisted bookmark bundle.
- `sources/` contains listing connectors that fetch raw pages.
- `normalize.py` contains envelope extraction, field resolution and projection.
- `listing.py` and `bookmarks.py` hold the two stateful halves.
- `store.py` composes them into `JobStore`, the surface a UI layer talks to.
"""
