"""
SampleWeb Backend - Application Package Initializer
===================================================

What: Marks the `sampleweb` directory as a Python package.
Who:  Used by uvicorn (`uvicorn sampleweb.main:app`), pytest, and every module
      that imports `from sampleweb.config import settings`.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │    Routes (Controller / HTTP)       │  ← handler declarations, FastAPI glue
    ├─────────────────────────────────────┤
    │   Services (Binder / Resolver)      │  ← bind → invoke → resolve
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← record shapes, Model, view results
    ├─────────────────────────────────────┤
    │   Templates (Jinja2)                │  ← views/*.html
    └─────────────────────────────────────┘

    Routes never parse parameters or build template paths themselves;
    they declare what they need and the services do the rest.
"""

__version__ = "1.0.0"
