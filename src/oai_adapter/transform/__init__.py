"""Message format conversion."""

from oai_adapter.transform.openai_format import convert_to_openai_messages

__all__ = ["convert_to_openai_messages"]
