"""
Test: AI oracles - essay grading and frame proctoring, including every
fallback path. All model calls go to a fake client.
"""
import asyncio

import httpx
import pytest

from smartschool.services.grading_service import (
    GRADING_FALLBACK_FEEDBACK,
    EssayGrade,
    GradingService,
    fallback_grade,
)
from smartschool.services.llm_service import OracleFailure, StructuredLLMService
from smartschool.services.proctoring_service import ProctoringService

from conftest import FakeClient


def grade(service, max_points=10):
    return asyncio.run(service.grade_essay("Explain gravity.", "Things fall down.", "Mentions mass", max_points))


class TestGradingFallback:
    def test_fallback_is_half_rounded_down(self):
        assert fallback_grade(10) == EssayGrade(score=5, feedback=GRADING_FALLBACK_FEEDBACK)
        assert fallback_grade(7).score == 3
        assert fallback_grade(1).score == 0

    def test_forced_failure_returns_exact_fallback(self):
        service = GradingService(client=FakeClient(error=RuntimeError("boom")), timeout=1)
        result = grade(service, 10)
        assert result.score == 5
        assert result.feedback == "Grading failed, assigned default score."

    def test_timeout_takes_fallback(self):
        client = FakeClient.replying({"score": 9, "feedback": "late"}, delay=0.5)
        service = GradingService(client=client, timeout=0.01)
        assert grade(service, 10) == fallback_grade(10)

    def test_no_api_key_takes_fallback(self):
        service = GradingService(api_key="")
        assert service.llm.client is None
        assert grade(service, 8) == fallback_grade(8)

    @pytest.mark.parametrize("content", [
        "not json",
        "",
        '{"feedback": "missing score"}',
        '{"score": 4}',
        '{"score": "many", "feedback": "x"}',
        '{"score": "8", "feedback": "numeric string"}',
        '{"score": true, "feedback": "boolean"}',
        '{"score": NaN, "feedback": "not a number"}',
        '{"score": Infinity, "feedback": "unbounded"}',
        '{"score": null, "feedback": "null"}',
    ])
    def test_malformed_reply_takes_fallback(self, content):
        service = GradingService(client=FakeClient(content=content), timeout=1)
        assert grade(service, 10) == fallback_grade(10)

    def test_network_error_takes_fallback(self):
        error = httpx.ConnectError("connection refused")
        service = GradingService(client=FakeClient(error=error), timeout=1)
        assert grade(service) == fallback_grade(10)


class TestGradingSuccess:
    def test_returns_model_score_and_feedback(self, fake_grading):
        result = grade(fake_grading, 10)
        assert result == EssayGrade(score=7, feedback="Clear argument, thin evidence.")

    def test_zero_score_is_kept(self):
        client = FakeClient.replying({"score": 0, "feedback": "Off topic."})
        result = grade(GradingService(client=client, timeout=1), 10)
        assert result == EssayGrade(score=0, feedback="Off topic.")

    def test_score_clamped_to_max_points(self):
        client = FakeClient.replying({"score": 15, "feedback": "Great"})
        assert grade(GradingService(client=client, timeout=1), 10).score == 10

    def test_negative_score_clamped_to_zero(self):
        client = FakeClient.replying({"score": -2, "feedback": "Wrong"})
        assert grade(GradingService(client=client, timeout=1), 10).score == 0

    def test_fractional_score_is_kept(self):
        client = FakeClient.replying({"score": 6.5, "feedback": "Mostly there"})
        assert grade(GradingService(client=client, timeout=1), 10).score == 6.5

    def test_prompt_carries_question_rubric_and_max_points(self):
        client = FakeClient.replying({"score": 3, "feedback": "ok"})
        grade(GradingService(client=client, model="gpt-test", timeout=1), 6)
        call = client.calls[0]
        assert call["model"] == "gpt-test"
        assert call["response_format"] == {"type": "json_object"}
        user_prompt = call["messages"][1]["content"]
        assert "Explain gravity." in user_prompt
        assert "Mentions mass" in user_prompt
        assert "Max Points: 6" in user_prompt


class TestStructuredLLMService:
    def test_raises_oracle_failure_without_client(self):
        service = StructuredLLMService(model="m", api_key="")
        with pytest.raises(OracleFailure):
            asyncio.run(service.complete_json("sys", "user"))

    def test_returns_raw_content(self):
        service = StructuredLLMService(model="m", client=FakeClient(content='{"a": 1}'), timeout=1)
        assert asyncio.run(service.complete_json("sys", "user")) == '{"a": 1}'


class TestProctoring:
    def test_anomaly_is_stored_as_alert(self, fake_proctoring, seeded_store):
        result = asyncio.run(fake_proctoring.record_frame("exam_001", "s1", "aGVsbG8="))
        assert result.ok
        assert result.data == {"stored": True}
        alerts = seeded_store.proctoring_alerts
        assert len(alerts) == 1
        assert alerts[0].exam_id == "exam_001"
        assert alerts[0].student_id == "s1"
        assert alerts[0].description == "Second face in frame"

    def test_clean_frame_stores_nothing(self, store):
        client = FakeClient.replying({"anomaly": False, "description": "Student focused on screen"})
        service = ProctoringService(store, client=client, timeout=1)
        assert asyncio.run(service.record_frame("e1", "s1", "aGVsbG8=")).data == {"stored": True}
        assert store.proctoring_alerts == []

    def test_frame_sent_as_image_data_url(self, store):
        client = FakeClient.replying({"anomaly": False, "description": "ok"})
        service = ProctoringService(store, client=client, timeout=1)
        asyncio.run(service.analyze_frame("aGVsbG8=", "e1", "s1"))
        parts = client.calls[0]["messages"][1]["content"]
        image = next(p for p in parts if p["type"] == "image_url")
        assert image["image_url"]["url"] == "data:image/jpeg;base64,aGVsbG8="

    def test_existing_data_url_passed_through(self, store):
        client = FakeClient.replying({"anomaly": False, "description": "ok"})
        service = ProctoringService(store, client=client, timeout=1)
        asyncio.run(service.analyze_frame("data:image/png;base64,AAAA"))
        parts = client.calls[0]["messages"][1]["content"]
        assert parts[1]["image_url"]["url"] == "data:image/png;base64,AAAA"

    def test_model_error_reports_analysis_failed(self, store):
        service = ProctoringService(store, client=FakeClient(error=RuntimeError("down")), timeout=1)
        result = asyncio.run(service.analyze_frame("aGVsbG8="))
        assert result.anomaly is False
        assert result.description == "Analysis failed"

    def test_invalid_json_reports_analysis_failed(self, store):
        service = ProctoringService(store, client=FakeClient(content="maybe?"), timeout=1)
        assert asyncio.run(service.analyze_frame("aGVsbG8=")).description == "Analysis failed"

    def test_timeout_reports_analysis_failed(self, store):
        client = FakeClient.replying({"anomaly": True, "description": "late"}, delay=0.5)
        service = ProctoringService(store, client=client, timeout=0.01)
        result = asyncio.run(service.record_frame("e1", "s1", "aGVsbG8="))
        assert result.data == {"stored": True}
        assert store.proctoring_alerts == []

    @pytest.mark.parametrize("payload", [
        {"anomaly": "yes", "description": "string flag"},
        {"anomaly": True},
        {"anomaly": True, "description": ""},
        {"description": "no flag"},
        ["not", "an", "object"],
    ])
    def test_wrong_shape_is_inconclusive(self, store, payload):
        service = ProctoringService(store, client=FakeClient.replying(payload), timeout=1)
        result = asyncio.run(service.analyze_frame("aGVsbG8="))
        assert result.anomaly is False
        assert result.description == "Analysis inconclusive"

    def test_get_alerts_filters_by_exam(self, fake_proctoring):
        asyncio.run(fake_proctoring.record_frame("exam_001", "s1", "AAAA"))
        asyncio.run(fake_proctoring.record_frame("exam_003", "s2", "AAAA"))
        assert len(fake_proctoring.get_alerts().data) == 2
        assert [a.student_id for a in fake_proctoring.get_alerts("exam_003").data] == ["s2"]
