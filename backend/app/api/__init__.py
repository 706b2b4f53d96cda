# @TASK S4-T4.1 - API package

"""Newsroom search REST API package.

Sub-modules expose FastAPI routers for each domain:
- search: public news search and autocomplete
"""
