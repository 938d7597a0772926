"""Core logic for the Schema Data Dictionary.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- load schema documents and pick the main (array) schema
- resolve `$ref` pointers and flatten `allOf` composition
- count keyword usage across extracted properties
- render the property list as an HTML table and as CSV
"""
