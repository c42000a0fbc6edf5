"""
REST API module for classloom.

Provides FastAPI endpoints for:
- Structural extraction of source text
- Diagram building, validation and Java generation
- Saved diagram management
"""
