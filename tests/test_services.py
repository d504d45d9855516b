import os
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("ANALYTICS_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

import httpx

from profiler.core.errors import ProviderError
from profiler.services import analysis_service, detection_service, evaluation_service, rewrite_service
from profiler.services.analysis_service import split_comparison_sections
from profiler.services.rewrite_service import rewrite_stats, split_rewrite_response


class FakeClient:
    def __init__(self, replies, provider="openai"):
        self.provider = provider
        self.replies = list(replies)
        self.calls = []

    async def complete(self, messages):
        self.calls.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


NO_DELAY = SimpleNamespace(
    evaluation_chunk_words=700,
    evaluation_chunk_threshold_words=1000,
    evaluation_chunk_delay_s=0.0,
)


class AnalysisServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_analyze_document(self):
        fake = FakeClient(["Intelligence Score: 84/100\n✓ Compresses well\nSummary: Dense.\nVerdict: Able."])
        with patch.object(analysis_service, "get_ai_client", return_value=fake):
            result = await analysis_service.analyze_document("Some short text to profile.", "openai")

        self.assertEqual(result.overall_score, 84)
        self.assertEqual(result.provider, "openai")
        self.assertEqual(result.word_count, 5)
        self.assertEqual(result.highlights, ["Compresses well"])
        prompt = fake.calls[0][0].content
        self.assertTrue(prompt.endswith("Some short text to profile."))
        self.assertIn("You are profiling a mind, not grading an essay.", prompt)

    async def test_compare_uses_sections(self):
        raw = (
            "TEXT A\nIntelligence Score: 80/100\nA tight thinker.\n\n"
            "TEXT B\nIntelligence Score: 60/100\nA loose thinker.\n\n"
            "COMPARISON\nA shows more control."
        )
        fake = FakeClient([raw])
        with patch.object(analysis_service, "get_ai_client", return_value=fake):
            result = await analysis_service.compare_documents("first text", "second text", "openai")

        self.assertEqual(result.document_a.score, 80)
        self.assertEqual(result.document_b.score, 60)
        self.assertEqual(result.winner, "A")

    async def test_compare_prefers_labelled_scores(self):
        raw = "Text A Score: 70/100\nText B Score: 75/100\nB is sharper."
        fake = FakeClient([raw])
        with patch.object(analysis_service, "get_ai_client", return_value=fake):
            result = await analysis_service.compare_documents("one", "two", "openai")
        self.assertEqual((result.document_a.score, result.document_b.score), (70, 75))
        self.assertEqual(result.winner, "B")

    async def test_compare_without_scores_is_unknown(self):
        fake = FakeClient(["Both are fine."])
        with patch.object(analysis_service, "get_ai_client", return_value=fake):
            result = await analysis_service.compare_documents("one", "two", "openai")
        self.assertEqual(result.winner, "unknown")
        self.assertEqual(result.document_a.score, 50)

    async def test_compare_single_unlabelled_score_is_not_a_tie(self):
        raw = "TEXT A is sharper.\nIntelligence Score: 82/100\nThe second text is weaker."
        fake = FakeClient([raw])
        with patch.object(analysis_service, "get_ai_client", return_value=fake):
            result = await analysis_service.compare_documents("one", "two", "openai")
        self.assertEqual(result.document_a.score, 82)
        self.assertTrue(result.document_a.score_found)
        self.assertFalse(result.document_b.score_found)
        self.assertEqual(result.winner, "unknown")

    def test_split_comparison_sections_without_headers(self):
        self.assertEqual(split_comparison_sections("no headers"), ("no headers", ""))


class EvaluationServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_quick_evaluation_averages_question_scores(self):
        fake = FakeClient(["Summary...\nQ1 Score: 80/100\nQ2 Score: 90/100"])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake):
            result = await evaluation_service.evaluate_document("short text", "openai", "originality")

        self.assertEqual(result.final_score, 85)
        self.assertEqual(len(result.phases), 1)
        self.assertIn("QUICK ORIGINALITY EVALUATION", result.report)
        self.assertIn("Final Score: 85/100", result.report)
        self.assertIn("IS IT INSIGHTFUL?", evaluation_service.get_questions("intelligence"))

    async def test_comprehensive_takes_max_of_phases(self):
        fake = FakeClient(["Score: 70/100", "Score: 80/100", "Final Score: 78/100"])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake):
            result = await evaluation_service.evaluate_document("short text", "openai", "cogency", True)

        self.assertEqual([p.score for p in result.phases], [70, 80, 78])
        self.assertEqual(result.final_score, 80)
        self.assertIn("30/100 outperform the author", fake.calls[1][0].content)
        self.assertIn("Current score: 80/100", fake.calls[2][0].content)

    async def test_high_first_phase_skips_pushback(self):
        fake = FakeClient(["Score: 96/100", "Final Score: 97/100"])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake):
            result = await evaluation_service.evaluate_document("short text", "openai", "originality", True)

        self.assertEqual([p.phase for p in result.phases], [1, 3])
        self.assertEqual(result.final_score, 97)

    async def test_long_text_is_chunked_and_failed_chunks_skipped(self):
        text = " ".join(["word"] * 1500)
        fake = FakeClient(["Score: 60/100", ProviderError("boom", provider="openai"), "Score: 90/100"])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake), patch.object(
            evaluation_service, "settings", NO_DELAY
        ):
            result = await evaluation_service.evaluate_document(text, "openai", "originality")

        self.assertEqual([c.word_count for c in result.chunks], [700, 100])
        self.assertEqual(result.failed_chunks, [2])
        self.assertEqual(result.final_score, 75)
        self.assertIn("Range: 60-90", result.report)

    async def test_all_chunks_failing_raises(self):
        text = " ".join(["word"] * 1200)
        fake = FakeClient([ProviderError("a"), ProviderError("b")])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake), patch.object(
            evaluation_service, "settings", NO_DELAY
        ):
            with self.assertRaises(ProviderError) as ctx:
                await evaluation_service.evaluate_document(text, "openai", "originality")
        self.assertEqual(ctx.exception.code, "evaluation_failed")

    async def test_unknown_mode_fails_before_provider_call(self):
        with patch.object(evaluation_service, "get_ai_client") as factory:
            with self.assertRaises(ValueError):
                await evaluation_service.evaluate_document("text", "openai", "vibes")
        factory.assert_not_called()

    async def test_dual_evaluation(self):
        fake = FakeClient(["Score: 70/100", "Score: 85/100", "Document B is stronger."])
        with patch.object(evaluation_service, "get_ai_client", return_value=fake):
            result = await evaluation_service.evaluate_dual("text a", "text b", "openai", "originality")

        self.assertEqual(result.winner, "B")
        self.assertIn("Document B demonstrates superior originality.", result.comparison)
        self.assertIn("Document A Score: 70/100", fake.calls[2][0].content)


class RewriteServiceTests(unittest.IsolatedAsyncioTestCase):
    def test_split_rewrite_response(self):
        raw = "REWRITTEN TEXT:\nNew text here.\n\nEXPLANATION:\nTightened logic."
        self.assertEqual(split_rewrite_response(raw), ("New text here.", "Tightened logic."))
        self.assertEqual(split_rewrite_response("Just text"), ("Just text", ""))
        bold = "**REWRITTEN TEXT:**\nX\n**EXPLANATION:** Y"
        self.assertEqual(split_rewrite_response(bold), ("X", "Y"))

    def test_rewrite_stats(self):
        stats = rewrite_stats("a b c d", "a b c d e f g", "expand")
        self.assertEqual(stats.original_length, 7)
        self.assertEqual(stats.rewritten_length, 13)
        self.assertEqual(stats.length_change, 85.7)
        self.assertEqual(stats.rewritten_words, 7)
        self.assertEqual(stats.instructions_followed, "expand")

    async def test_rewrite_document(self):
        fake = FakeClient(["REWRITTEN TEXT:\nBetter.\n\nEXPLANATION:\nClearer."], provider="anthropic")
        with patch.object(rewrite_service, "get_ai_client", return_value=fake):
            result = await rewrite_service.rewrite_document("Good.", "Improve it", "anthropic")

        self.assertEqual(result.content, "Better.")
        self.assertEqual(result.explanation, "Clearer.")
        self.assertEqual(fake.calls[0][0].role, "system")
        self.assertIn("INSTRUCTIONS:\nImprove it", fake.calls[0][1].content)

    async def test_empty_rewrite_is_rejected(self):
        fake = FakeClient(["   "])
        with patch.object(rewrite_service, "get_ai_client", return_value=fake):
            with self.assertRaises(ValueError):
                await rewrite_service.rewrite_document("Good.", "Improve it", "openai")

    async def test_translate_document(self):
        fake = FakeClient(["  Bonjour.  "])
        with patch.object(rewrite_service, "get_ai_client", return_value=fake):
            result = await rewrite_service.translate_document("Hello.", "French", "openai", preserve_tone=False)

        self.assertEqual(result.translated_text, "Bonjour.")
        prompt = fake.calls[0][1].content
        self.assertIn("Translate this text into French", prompt)
        self.assertNotIn("Preserve the author's tone", prompt)


class DetectionServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_llm_detection(self):
        fake = FakeClient(["AI Probability: 72%\nUniform rhythm."])
        with patch.object(detection_service, "get_ai_client", return_value=fake), patch.object(
            detection_service, "settings", SimpleNamespace(gptzero_api_key=None)
        ):
            result = await detection_service.detect_ai_text("Some text", "openai")

        self.assertEqual(result.probability, 72)
        self.assertTrue(result.is_ai)
        self.assertEqual(result.source, "openai")

    async def test_llm_detection_without_probability_is_provider_error(self):
        fake = FakeClient(["I cannot tell."])
        with patch.object(detection_service, "get_ai_client", return_value=fake), patch.object(
            detection_service, "settings", SimpleNamespace(gptzero_api_key=None)
        ):
            with self.assertRaises(ProviderError):
                await detection_service.detect_ai_text("Some text", "openai")

    async def test_gptzero_detection(self):
        seen = {}

        def handler(request):
            seen["key"] = request.headers.get("x-api-key")
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"documents": [{"completely_generated_prob": 0.234}]})

        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        with patch.object(detection_service, "settings", SimpleNamespace(gptzero_api_key="gz-key")), patch.object(
            detection_service.httpx, "AsyncClient", side_effect=client_factory
        ):
            result = await detection_service.detect_ai_text("Some text")

        self.assertEqual(seen["key"], "gz-key")
        self.assertEqual(seen["url"], detection_service.GPTZERO_URL)
        self.assertEqual(result.source, "gptzero")
        self.assertEqual(result.probability, 23)
        self.assertFalse(result.is_ai)

    async def test_gptzero_unexpected_payload_is_provider_error(self):
        real_client = httpx.AsyncClient

        for body in ([0.5], {"documents": [{"completely_generated_prob": "n/a"}]}, {"documents": "none"}):
            def handler(request, body=body):
                return httpx.Response(200, json=body)

            def client_factory(handler=handler, **kwargs):
                return real_client(transport=httpx.MockTransport(handler), **kwargs)

            with self.subTest(body=body), patch.object(
                detection_service, "settings", SimpleNamespace(gptzero_api_key="gz-key")
            ), patch.object(detection_service.httpx, "AsyncClient", side_effect=client_factory):
                with self.assertRaises(ProviderError):
                    await detection_service.detect_ai_text("Some text")


if __name__ == "__main__":
    unittest.main()
