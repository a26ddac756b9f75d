"""optionfields: extensible field types for schema-driven APIs.

Field types contribute typed schema fragments, define default and merge
semantics for partial updates, and bind to document or relational storage
through per-backend adapters registered with pluggy.
"""

__version__ = "0.1.0"
