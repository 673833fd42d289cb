"""
OpenAI Message Format

Converts conversations in the generic (Anthropic-style) message format
into OpenAI chat completion messages.
"""

import json
from typing import Any, Iterable, Optional

from anthropic.types import MessageParam
from openai.types.chat import ChatCompletionMessageParam

TOOL_RESULT_IMAGE_PLACEHOLDER = "(see following user message for image)"


def _image_part(block: dict[str, Any]) -> dict[str, Any]:
    source = block["source"]
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{source['media_type']};base64,{source['data']}"},
    }


def _user_part(block: dict[str, Any]) -> dict[str, Any]:
    if block["type"] == "image":
        return _image_part(block)
    return {"type": "text", "text": block.get("text", "")}


def _tool_result_message(
    block: dict[str, Any], images: list[dict[str, Any]]
) -> dict[str, Any]:
    """Build a tool message; images are moved to the following user message."""
    content = block.get("content")
    if content is None:
        text = ""
    elif isinstance(content, str):
        text = content
    else:
        parts = []
        for part in content:
            if part["type"] == "image":
                images.append(part)
                parts.append(TOOL_RESULT_IMAGE_PLACEHOLDER)
            else:
                parts.append(part.get("text", ""))
        text = "\n".join(parts)

    return {
        "role": "tool",
        "tool_call_id": block["tool_use_id"],
        "content": text,
    }


def _convert_user_blocks(blocks: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    tool_messages: list[dict[str, Any]] = []
    user_blocks: list[dict[str, Any]] = []
    tool_result_images: list[dict[str, Any]] = []

    for block in blocks:
        if block["type"] == "tool_result":
            tool_messages.append(_tool_result_message(block, tool_result_images))
        elif block["type"] in ("text", "image"):
            user_blocks.append(block)

    # Tool results must directly follow the assistant message that called them
    converted = list(tool_messages)
    user_blocks.extend(tool_result_images)
    if user_blocks:
        converted.append({
            "role": "user",
            "content": [_user_part(b) for b in user_blocks],
        })
    return converted


def _convert_assistant_blocks(blocks: Iterable[dict[str, Any]]) -> dict[str, Any]:
    texts: list[str] = []
    tool_calls: list[dict[str, Any]] = []

    for block in blocks:
        if block["type"] == "text":
            texts.append(block.get("text", ""))
        elif block["type"] == "tool_use":
            tool_calls.append({
                "id": block["id"],
                "type": "function",
                "function": {
                    "name": block["name"],
                    "arguments": json.dumps(block.get("input", {})),
                },
            })

    content: Optional[str] = "\n".join(texts) if texts else None
    message: dict[str, Any] = {"role": "assistant"}
    if tool_calls:
        message["content"] = content
        message["tool_calls"] = tool_calls
    else:
        message["content"] = content or ""
    return message


def convert_to_openai_messages(
    messages: Iterable[MessageParam],
) -> list[ChatCompletionMessageParam]:
    """
    Convert generic conversation messages to OpenAI chat messages.

    Args:
        messages: Messages with a role and either string content or a list
            of text, image, tool_use and tool_result blocks.

    Returns:
        Messages in the OpenAI chat completion schema. A user message
        carrying tool results expands into one tool message per result,
        followed by a user message for any remaining content.
    """
    converted: list[dict[str, Any]] = []

    for message in messages:
        role = message["role"]
        content = message["content"]

        if isinstance(content, str):
            converted.append({"role": role, "content": content})
        elif role == "user":
            converted.extend(_convert_user_blocks(content))
        elif role == "assistant":
            converted.append(_convert_assistant_blocks(content))

    return converted  # type: ignore[return-value]
