"""Browser-based web UI for py-sysprog.

This package provides a Flask application that exposes the simulators
through a web browser.  It is an **optional** extra — install with::

    pip install py-sysprog[web]

The ``create_app`` factory in ``app.py`` creates a shell and serves
four endpoints:

- ``GET /`` — HTML terminal page.
- ``GET /api/programs`` — names of the batch reports.
- ``GET /api/run/<program>`` — run one report and return JSON.
- ``POST /api/execute`` — execute a shell command and return JSON.
"""
