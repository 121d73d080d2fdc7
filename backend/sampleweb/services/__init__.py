# Services package init
"""
SampleWeb Backend - Services Layer
==================================

What:  The binding and view-resolution machinery between routes and templates.

Service Inventory:
    - request_context.py: WebRequest (parameters + request attributes)
    - binder.py:          handler parameter declarations and bind_arguments()
    - view_resolver.py:   ViewResolver (view name → template or redirect)
    - dispatcher.py:      HandlerMethod (bind → invoke → resolve)

None of these import FastAPI routing, so each can be unit-tested with a
hand-built WebRequest.
"""
