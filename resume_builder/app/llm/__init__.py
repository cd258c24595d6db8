"""Text-generation adapter: prompt construction and calls to the chat model."""
