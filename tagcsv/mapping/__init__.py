"""
Tag-driven schema resolution and value coercion.

Resolves record type annotations into a schema, binds the schema to a file's
header row, and converts between cell text and typed field values.
"""
