"""
Web application package for Park Chess.

Provides a FastAPI JSON API over a GameSession so a browser board can play
against the engine. Run with: uvicorn web.app:app
"""
