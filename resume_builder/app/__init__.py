"""This module serves as the entry point for the resume builder application.

It exposes no functionality of its own. The application is assembled in
`app.main.create_app`, which wires the storage backend, routers, and
middleware together.

Notes:
    1. app.core holds settings, password hashing, tokens, and auth dependencies.
    2. app.schemas holds the pydantic shapes and the validation helpers.
    3. app.storage holds the storage interface and its two implementations.
    4. app.llm holds the text-generation adapter.
    5. No disk, network, or database access occurs in this module directly.

"""
