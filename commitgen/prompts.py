from .models import GenerationRequest, Prompt

SYSTEM_PROMPT = """You are an expert at writing clear, concise, and professional Git commit messages following conventional commit standards.

When analyzing git diffs:
1. Focus on the actual code changes and their purpose
2. Identify added/removed/modified files
3. Understand the context of the changes
4. Determine the most appropriate commit type

Generate commit messages that:
1. Follow the format: type(scope): subject
2. Use imperative mood ("add" not "added" or "adds")
3. Keep subject line under 72 characters
4. Are clear and descriptive
5. Include a body with more details if needed
6. Accurately reflect the actual changes in the code

Common types: feat, fix, docs, style, refactor, test, chore, perf, ci, build

For scope, use the affected module, component, or area of the codebase.

Return ONLY a JSON object with this structure:
{
  "commitMessage": "the main commit message",
  "body": "optional detailed explanation (can be empty string)",
  "alternatives": ["alternative 1", "alternative 2", "alternative 3"]
}

Do not include any markdown formatting, code blocks, or additional text. Return only the raw JSON object."""


def _labeled(label, value):
    if value and not value.isspace():
        return [f"{label}: {value}"]
    return []


def build_user_prompt(request: GenerationRequest) -> str:
    """
    Renders the per-request instruction.

    A diff takes precedence: it is embedded in a fenced block and the free-text
    description becomes an extra labeled line. Without a diff the description is
    the main subject of the prompt.
    """
    if request.git_diff:
        prompt_lines = [
            "Analyze this git diff and generate appropriate commit messages:",
            "",
            "```diff",
            request.git_diff,
            "```",
        ]
        labeled_lines = _labeled("Additional description", request.changes)
        closing = "Based on the actual code changes in the diff, provide one main commit message and 3 alternatives."
    else:
        prompt_lines = ["Generate commit messages for these changes:"]
        labeled_lines = [f"Changes: {request.changes}"]
        closing = "Provide one main commit message and 3 alternatives."

    labeled_lines += _labeled("Preferred type", request.commit_type)
    labeled_lines += _labeled("Additional context", request.context)
    if labeled_lines:
        prompt_lines.append("")
        prompt_lines += labeled_lines
    prompt_lines.append("")
    prompt_lines.append(closing)

    return "\n".join(prompt_lines)


def build_prompt(request: GenerationRequest) -> Prompt:
    return Prompt(system=SYSTEM_PROMPT, user=build_user_prompt(request))
