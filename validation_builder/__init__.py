"""
Validation JSON builder.

Infers a field-validation schema from a sample JSON document and
serializes it to (and loads it from) the Validation JSON format.
"""

__version__ = "0.1.0"
