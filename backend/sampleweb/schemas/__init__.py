# Schemas package init
"""
SampleWeb Backend - Schemas
===========================

Inventory:
    - view.py:   Model, ModelAndView, and the resolver's view instructions
    - health.py: HealthResponse and the shared ErrorResponse body
"""
