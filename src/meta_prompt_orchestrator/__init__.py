"""
Meta Prompt Orchestrator package.

Provides:
- Placeholder detection and substitution for {{name}} meta prompt templates
- Pack registry and composer for dispatch text and JSON snapshots
- FastAPI surface and headless CLI over a single session
"""
