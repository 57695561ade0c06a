"""System prompt and prompt templates."""

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful, concise AI assistant. Provide clear, well-structured responses. "
    "When appropriate, use markdown formatting for readability. "
    "If you're unsure about something, say so rather than guessing."
)

CREATIVE_SYSTEM_PROMPT = (
    "You are a creative collaborator. Offer original ideas, vivid language and unexpected angles, "
    "while staying relevant to the user's request."
)

REASONING_ANALYSIS_PROMPT = (
    "You are an expert problem solver. Analyze this problem and break it down into key components:\n\n"
    "{problem}\n\nProvide a structured analysis."
)

REASONING_BREAKDOWN_PROMPT = (
    "Based on this analysis:\n\n{analysis}\n\nBreak the problem into 3-5 specific sub-problems or steps."
)

REASONING_SOLUTION_PROMPT = (
    "Given this problem breakdown:\n\n{breakdown}\n\nProvide a comprehensive solution with concrete recommendations."
)

SYNTHESIS_PROMPT = (
    "You are synthesizing insights from multiple specialized AI agents.\n\n"
    "Task: {task}\n\n"
    "Agent Responses:\n{responses}\n\n"
    "Provide a unified, coherent response that:\n"
    "1. Combines the best insights from each agent\n"
    "2. Resolves any contradictions\n"
    "3. Presents a comprehensive solution\n"
    "4. Highlights unique perspectives from each agent"
)

IMAGE_QUALITY_SUFFIX = "Ultra high resolution, professional quality."


def build_system_prompt(custom_prompt: str | None = None) -> str:
    return custom_prompt or DEFAULT_SYSTEM_PROMPT


def build_image_prompt(prompt: str, style: str | None = None) -> str:
    if style:
        return f"{prompt}. Style: {style}. {IMAGE_QUALITY_SUFFIX}"
    return f"{prompt}. {IMAGE_QUALITY_SUFFIX}"


def build_synthesis_prompt(task: str, responses: dict[str, str]) -> str:
    formatted = "\n\n".join(f"{agent.upper()}: {text}" for agent, text in responses.items())
    return SYNTHESIS_PROMPT.format(task=task, responses=formatted)
