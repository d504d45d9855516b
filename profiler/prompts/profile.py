from profiler.ai.types import ChatMessage


COGNITIVE_PROFILE_PROMPT = """
You are not grading this text.
You are not evaluating its completeness.
You are evaluating the intelligence of the mind that produced it.

The text is a cognitive fingerprint.
Based on what it reveals, what kind of thinker wrote it?

Estimate intelligence from 1 to 100.
Explain your score.
Focus on originality, abstraction, synthesis, inference, and compression.
Ignore polish, structure, citations, or whether it's a full argument.
You are profiling a mind, not grading an essay.

Start your response with "Intelligence Score: [score]/100".
End with one line "Summary: ..." and one line "Verdict: ...".
Mark the strongest observations with lines starting with "✓".
""".strip()


def build_profile_messages(text: str) -> list[ChatMessage]:
    return [ChatMessage(role="user", content=f"{COGNITIVE_PROFILE_PROMPT}\n\n{text}")]


def build_comparison_messages(text_a: str, text_b: str) -> list[ChatMessage]:
    content = (
        f"{COGNITIVE_PROFILE_PROMPT}\n\n"
        "I need you to analyze TWO separate texts and provide a cognitive profile for each:\n\n"
        f"TEXT A:\n{text_a}\n\n"
        f"TEXT B:\n{text_b}\n\n"
        "For each text:\n"
        "1. What kind of thinker wrote it?\n"
        "2. Estimate intelligence from 1 to 100, written as "
        "\"Text A Score: N/100\" and \"Text B Score: N/100\"\n"
        "3. Explain your score based on originality, abstraction, synthesis, inference, and compression\n\n"
        "Then compare the two minds:\n"
        "- What are the key differences in cognitive style?\n"
        "- Which shows evidence of higher intelligence and why?"
    )
    return [ChatMessage(role="user", content=content)]


AI_DETECTION_PROMPT = """
Estimate how likely it is that the following text was generated by an AI language model
rather than written by a person. Consider uniformity of sentence rhythm, generic phrasing,
hedging, lack of concrete personal detail, and over-balanced structure.

Start your response with "AI Probability: N%" where N is an integer from 0 to 100,
then give a short justification.
""".strip()


def build_detection_messages(text: str) -> list[ChatMessage]:
    return [ChatMessage(role="user", content=f"{AI_DETECTION_PROMPT}\n\nTEXT:\n{text}")]
