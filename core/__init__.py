"""
hacker-stories core package.

Modules
───────
models      — Pydantic data models (Story, ResultState, SearchPayload)
exceptions  — HackerStoriesError and its subclasses
preferences — SQLite-backed key/value preference store (fail-open)
query       — QueryTarget and SearchQueryBuilder
reducer     — result-state events, reduce() and ResultsStore
fetcher     — FetchOrchestrator: httpx search with stale-result discard
filtering   — visible(): case-insensitive title filter
session     — SearchSession wiring the above together
"""
