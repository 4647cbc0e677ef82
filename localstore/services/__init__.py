"""
High-level use cases for the local data store.

store.py holds the typed get/write/exists operations over an injected
storage context; bindings.py and events.py build observable views and change
notifications on top of them. Routers and the CLI call these instead of
touching records directly.
"""
