"""Pydantic shapes for users, templates, resumes, and generation requests.

The `validation` submodule wraps these shapes in a non-raising check that
reports every violated field.
"""
