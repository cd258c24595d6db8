"""Reference templates written into every new storage instance."""

DEFAULT_TEMPLATES: list[dict] = [
    {
        "name": "Professional",
        "description": "Clean and modern design suitable for corporate roles",
        "structure": {
            "layout": "classic",
            "colors": {"primary": "#2563eb", "secondary": "#1e293b"},
        },
    },
    {
        "name": "Creative",
        "description": "Bold and unique design for creative industries",
        "structure": {
            "layout": "modern",
            "colors": {"primary": "#8b5cf6", "secondary": "#1e293b"},
        },
    },
]
