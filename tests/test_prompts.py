"""
Test: YAML prompt loading and interpolation.
"""
from smartschool.services import prompt_management
from smartschool.services.prompt_management import clear_cache, get_prompt


class TestGetPrompt:
    def test_essay_prompt_interpolates_variables(self):
        prompts = get_prompt("essay_grading", question_text="Q?", essay="E.", rubric="R", max_points=4)
        assert "Question: Q?" in prompts["human_prompt"]
        assert "Max Points: 4" in prompts["human_prompt"]
        # Escaped braces survive formatting as literal JSON
        assert '{"score": number, "feedback": "string"}' in prompts["system_prompt"]

    def test_missing_variable_keeps_template(self):
        prompts = get_prompt("essay_grading", question_text="Q?")
        assert "{essay}" in prompts["human_prompt"]

    def test_unknown_prompt_is_empty(self):
        assert get_prompt("does_not_exist") == {"system_prompt": "", "human_prompt": ""}

    def test_clear_cache_reloads_from_disk(self, tmp_path, monkeypatch):
        (tmp_path / "greeting.yaml").write_text("system_prompt: Hello {name}\n", encoding="utf-8")
        monkeypatch.setattr(prompt_management, "PROMPTS_DIR", str(tmp_path))
        clear_cache()
        assert get_prompt("greeting", name="Ada")["system_prompt"] == "Hello Ada"

        (tmp_path / "greeting.yaml").write_text("system_prompt: Bye {name}\n", encoding="utf-8")
        assert get_prompt("greeting", name="Ada")["system_prompt"] == "Hello Ada"
        clear_cache()
        assert get_prompt("greeting", name="Ada")["system_prompt"] == "Bye Ada"

        monkeypatch.undo()
        clear_cache()
