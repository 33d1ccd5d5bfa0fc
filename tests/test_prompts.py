from commitgen.models import GenerationRequest
from commitgen.prompts import SYSTEM_PROMPT, build_prompt, build_user_prompt

SAMPLE_DIFF = "diff --git a/x b/x\n+console.log('x')"


def test_system_prompt_describes_output_contract():
    assert "type(scope): subject" in SYSTEM_PROMPT
    assert "72 characters" in SYSTEM_PROMPT
    assert "feat, fix, docs, style, refactor, test, chore, perf, ci, build" in SYSTEM_PROMPT
    for key in ("commitMessage", "body", "alternatives"):
        assert f'"{key}"' in SYSTEM_PROMPT


def test_diff_prompt_embeds_diff_in_fenced_block():
    prompt = build_user_prompt(GenerationRequest(git_diff=SAMPLE_DIFF))
    assert f"```diff\n{SAMPLE_DIFF}\n```" in prompt
    assert prompt.endswith(
        "Based on the actual code changes in the diff, provide one main commit message and 3 alternatives."
    )
    assert "Additional description:" not in prompt
    assert "Preferred type:" not in prompt
    assert "Additional context:" not in prompt


def test_diff_prompt_includes_labeled_lines():
    request = GenerationRequest(
        git_diff=SAMPLE_DIFF, changes="add debug logging", commit_type="chore", context="temporary"
    )
    prompt = build_user_prompt(request)
    assert "Additional description: add debug logging" in prompt
    assert "Preferred type: chore" in prompt
    assert "Additional context: temporary" in prompt
    assert "Changes:" not in prompt


def test_diff_takes_precedence_over_description():
    prompt = build_user_prompt(GenerationRequest(git_diff=SAMPLE_DIFF, changes="something"))
    assert prompt.startswith("Analyze this git diff")


def test_description_prompt():
    request = GenerationRequest(changes="Added login form", commit_type="feat")
    prompt = build_user_prompt(request)
    assert prompt == (
        "Generate commit messages for these changes:\n"
        "\n"
        "Changes: Added login form\n"
        "Preferred type: feat\n"
        "\n"
        "Provide one main commit message and 3 alternatives."
    )


def test_blank_optional_fields_are_omitted():
    request = GenerationRequest(changes="Fix typo", commit_type="  ", context="")
    prompt = build_user_prompt(request)
    assert "Preferred type" not in prompt
    assert "Additional context" not in prompt


def test_build_prompt_is_deterministic():
    request = GenerationRequest(git_diff=SAMPLE_DIFF, changes="x", commit_type="feat", context="ctx")
    first = build_prompt(request)
    second = build_prompt(GenerationRequest(**request.model_dump()))
    assert first.system == SYSTEM_PROMPT
    assert first == second
    assert first.user.encode() == second.user.encode()
