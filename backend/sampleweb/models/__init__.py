# Models package init
"""
SampleWeb Backend - Record Models
=================================

What:  Structured records that request parameters can be bound onto.

Inventory:
    - shape.py:   RecordShape / FieldSpec declarations and the shape registry
    - product.py: Product record, registered as shape "ProductVO"
"""
