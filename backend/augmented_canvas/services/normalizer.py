"""
Augmented Canvas Backend — Request Normalization
=================================================

What:  Flattens the two accepted prompt request shapes into one prompt string.

    SingleNodeRequest  → content, unchanged
    MultiNodeRequest   → "Node 1: <content>\\n\\n" ... "Node N: <content>\\n\\n"
                         followed by "Prompt: <instruction>"

Node order is preserved; node ids never appear in the prompt text.
"""

from typing import Optional, Tuple

from augmented_canvas.schemas.canvas import MultiNodeRequest, PromptRequest


def combine_nodes(request: MultiNodeRequest) -> str:
    parts = [
        f"Node {index}: {node.content}\n\n"
        for index, node in enumerate(request.nodes, start=1)
    ]
    parts.append(f"Prompt: {request.instruction}")
    return "".join(parts)


def normalize(request: PromptRequest) -> Tuple[str, Optional[str]]:
    """Return (prompt_text, system_prompt) for either request shape."""
    if isinstance(request, MultiNodeRequest):
        return combine_nodes(request), request.system_prompt
    return request.content, request.system_prompt
