# packages/gcswf/src/gcswf/cli/__init__.py
