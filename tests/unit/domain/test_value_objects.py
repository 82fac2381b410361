"""
Unit tests for Domain Value Objects.

Tests:
- Language tag normalization
- Job construction from a request
- ExecutionResult invariants and HTTP shape
- Judge payload and outcome helpers
"""

from dataclasses import FrozenInstanceError

import pytest

from playground.domain.value_objects import (
    ExecutionRequest,
    ExecutionResult,
    JudgeJob,
    JudgeOutcome,
    JudgeSubmission,
    Language,
    LanguageCatalogEntry,
    PythonJob,
    ScriptJob,
    TypedScriptJob,
)


class TestLanguage:
    """Tests for Language tag normalization."""

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("javascript", Language.JAVASCRIPT),
            ("script", Language.JAVASCRIPT),
            ("JS", Language.JAVASCRIPT),
            ("typed-script", Language.TYPESCRIPT),
            ("ts", Language.TYPESCRIPT),
            (" python ", Language.PYTHON),
            ("c", Language.C),
            ("c++", Language.CPP),
            ("Java", Language.JAVA),
        ],
    )
    def test_from_tag_accepts_aliases(self, tag, expected):
        assert Language.from_tag(tag) is expected

    @pytest.mark.parametrize("tag", ["ruby", "", None, 42])
    def test_from_tag_unknown_returns_none(self, tag):
        assert Language.from_tag(tag) is None

    def test_judge_languages(self):
        assert {lang for lang in Language if lang.is_judge_language} == {Language.C, Language.CPP, Language.JAVA}


class TestExecutionRequest:
    """Tests for ExecutionRequest value object."""

    def test_has_source_rejects_whitespace(self):
        assert ExecutionRequest(language="javascript", source="1").has_source()
        assert not ExecutionRequest(language="javascript", source="   \n\t").has_source()
        assert not ExecutionRequest(language="javascript", source="").has_source()

    def test_to_job_variants(self):
        assert ExecutionRequest("javascript", "1").to_job() == ScriptJob("1")
        assert ExecutionRequest("typescript", "1").to_job() == TypedScriptJob("1")
        assert ExecutionRequest("py", "1").to_job() == PythonJob("1")
        assert ExecutionRequest("cpp", "int main(){}", stdin="5").to_job() == JudgeJob(
            language=Language.CPP, source="int main(){}", stdin="5"
        )

    def test_to_job_unknown_language(self):
        assert ExecutionRequest("cobol", "DISPLAY 'HI'").to_job() is None

    def test_request_is_immutable(self):
        request = ExecutionRequest("javascript", "1")
        with pytest.raises(FrozenInstanceError):
            request.source = "2"


class TestExecutionResult:
    """Tests for ExecutionResult value object."""

    def test_success_to_dict_uses_result_key(self):
        result = ExecutionResult.success("2", logs=["hi"])

        assert result.to_dict() == {"ok": True, "result": "2", "logs": ["hi"]}

    def test_failure_to_dict(self):
        result = ExecutionResult.failure("boom")

        assert result.to_dict() == {"ok": False, "error": "boom", "logs": []}

    def test_exactly_one_of_output_and_error(self):
        with pytest.raises(ValueError):
            ExecutionResult(ok=True, output="x", error="y")
        with pytest.raises(ValueError):
            ExecutionResult(ok=True)
        with pytest.raises(ValueError):
            ExecutionResult(ok=False, output="x")

    def test_empty_output_is_valid(self):
        assert ExecutionResult.success("").output == ""


class TestJudgeValues:
    """Tests for judge related value objects."""

    def test_submission_payload_omits_missing_stdin(self):
        payload = JudgeSubmission(language_id=54, source_base64="aGk=").to_payload()

        assert payload == {"language_id": 54, "source_code": "aGk="}

    def test_submission_payload_with_stdin(self):
        payload = JudgeSubmission(language_id=54, source_base64="aGk=", stdin_base64="NQ==").to_payload()

        assert payload["stdin"] == "NQ=="

    def test_combined_output_skips_empty_segments(self):
        outcome = JudgeOutcome(
            status={"id": 6, "description": "Compilation Error"},
            stdout="",
            stderr="warn",
            compile_output="main.c:1: error",
            time=None,
            memory=None,
            language_id=50,
        )

        assert outcome.combined_output() == "main.c:1: error\nwarn"

    def test_combined_output_all_empty(self):
        outcome = JudgeOutcome(status=None, stdout="", stderr="", compile_output="", time=None, memory=None, language_id=50)

        assert outcome.combined_output() == ""

    def test_outcome_to_dict(self):
        outcome = JudgeOutcome(
            status={"id": 3, "description": "Accepted"},
            stdout="hi\n",
            stderr="",
            compile_output="",
            time="0.01",
            memory=1024,
            language_id=54,
        )

        assert outcome.to_dict() == {
            "ok": True,
            "status": {"id": 3, "description": "Accepted"},
            "stdout": "hi\n",
            "stderr": "",
            "compile_output": "",
            "time": "0.01",
            "memory": 1024,
            "language_id": 54,
        }

    def test_catalog_entry_from_dict(self):
        entry = LanguageCatalogEntry.from_dict({"id": "62", "name": "Java (OpenJDK 13.0.1)"})

        assert entry == LanguageCatalogEntry(id=62, name="Java (OpenJDK 13.0.1)")
