"""LLM provider credentials configured per project.

Rows are managed by the host application's settings screens; this package only
reads them to call the configured completion provider.
"""
