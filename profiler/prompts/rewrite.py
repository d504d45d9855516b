from profiler.ai.types import ChatMessage

REWRITE_SYSTEM_PROMPT = "You are an expert in cognitive enhancement and writing improvement."

TRANSLATION_SYSTEM_PROMPT = "You are a translator who preserves the reasoning of the original text."


def build_rewrite_messages(
    text: str,
    instructions: str,
    *,
    preserve_length: bool = False,
    preserve_depth: bool = True,
) -> list[ChatMessage]:
    guidelines = [
        "- Focus on enhancing the cognitive quality and clarity of thought, not just surface writing",
        "- Preserve the intellectual signature and thinking style of the original author",
        "- Enhance organization and flow of complex ideas",
        "- If the original reveals limitations in reasoning, improve the logical structure while keeping the author's voice",
    ]
    if preserve_depth:
        guidelines.append("- Maintain the original's conceptual density and inferential structure")
    if preserve_length:
        guidelines.append("- Keep the rewrite within roughly the same length as the original")

    user = (
        "I need you to rewrite the following text while maintaining or enhancing "
        "the cognitive patterns revealed in the original.\n\n"
        f"DOCUMENT:\n{text}\n\n"
        f"INSTRUCTIONS:\n{instructions}\n\n"
        "IMPORTANT GUIDELINES:\n"
        + "\n".join(guidelines)
        + "\n\nRespond in exactly this format:\n"
        "REWRITTEN TEXT:\n<the rewritten text>\n\n"
        "EXPLANATION:\n<a brief explanation of the cognitive improvements made>"
    )
    return [
        ChatMessage(role="system", content=REWRITE_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user),
    ]


def build_translation_messages(
    text: str,
    target_language: str,
    *,
    preserve_formatting: bool = True,
    preserve_tone: bool = True,
) -> list[ChatMessage]:
    lines = [
        "TRANSLATION WHILE PRESERVING COGNITIVE PATTERNS",
        "",
        "Original text:",
        '"""',
        text,
        '"""',
        "",
        f"Translate this text into {target_language} while carefully preserving:",
        "- The cognitive complexity and depth of the original",
        "- The intellectual structure and flow",
        "- The conceptual precision and nuance",
    ]
    if preserve_formatting:
        lines.append("Important: Maintain the same formatting, paragraph structure, and layout as the original.")
    if preserve_tone:
        lines.append("Important: Preserve the author's tone, style, and voice in the translation.")
    lines.append("Return only the translated text.")
    return [
        ChatMessage(role="system", content=TRANSLATION_SYSTEM_PROMPT),
        ChatMessage(role="user", content="\n".join(lines)),
    ]
