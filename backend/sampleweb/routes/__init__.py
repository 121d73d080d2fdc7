# Routes package init
"""
SampleWeb Backend - Routes Package
==================================

What:  HTTP entry points.

Route Inventory:
    - controller.py: Controller, the declarative handler → route glue
    - sample.py:     the sample handlers (doA ... doG, redirect, main.home)
    - health.py:     GET /health

Design Principle:
    Handlers stay thin. They declare the parameters they need and return
    a view name; binding and view resolution live in services/.
"""
