"""
Adapters — the edges of the system.

    tree          staged read/write access to the target project
    npm_registry  latest-version lookups over HTTP
    node_install  runs the deferred package install
"""
