import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from profiler.parsing.response_parser import (
    clamp_score,
    clean_markdown,
    extract_evaluation_score,
    extract_highlights,
    extract_intelligence_score,
    extract_summary,
    extract_verdict,
    parse_profile_response,
)

PSEUDO_TEXT = (
    "We situate the recursive landscape of meaning within a fluid interface, "
    "where each semiotic event reconfigures the polycentric episteme."
)


class IntelligenceScoreTests(unittest.TestCase):
    def test_reads_labelled_score(self):
        self.assertEqual(extract_intelligence_score("Intelligence Score: 82/100\nThe author..."), 82)

    def test_final_score_wins_over_earlier_labels(self):
        text = "Intelligence Score: 70/100\n...\nFinal Intelligence Score: 91/100"
        self.assertEqual(extract_intelligence_score(text), 91)

    def test_out_of_range_value_falls_through_to_next_pattern(self):
        self.assertEqual(extract_intelligence_score("Score: 150/100\nCognitive Score: 40"), 40)

    def test_percentile_phrase(self):
        self.assertEqual(extract_intelligence_score("Percentile: Author outperforms 87% of writers."), 87)

    def test_contextual_fallback(self):
        self.assertEqual(extract_intelligence_score("I would put this intelligence at 64 out of 100."), 64)

    def test_returns_none_without_a_score(self):
        self.assertIsNone(extract_intelligence_score("A thoughtful, careful writer."))
        self.assertIsNone(extract_intelligence_score(""))


class EvaluationScoreTests(unittest.TestCase):
    def test_final_score_line(self):
        self.assertEqual(extract_evaluation_score("Score: 40/100\nFinal Score: 88/100"), 88)

    def test_mean_of_question_scores_rounds_half_up(self):
        self.assertEqual(extract_evaluation_score("Q1 Score: 80/100\nQ2 Score: 91/100"), 86)

    def test_mean_of_bare_fractions_needs_more_than_one(self):
        self.assertEqual(extract_evaluation_score("between 70/100 and 90/100"), 80)
        self.assertEqual(extract_evaluation_score("roughly 60/100 overall"), 75)

    def test_fallback_and_clamping(self):
        self.assertEqual(extract_evaluation_score(""), 75)
        self.assertEqual(extract_evaluation_score("nothing here", fallback=40), 40)
        self.assertEqual(extract_evaluation_score("Final Score: 250/100"), 100)

    def test_clamp_score(self):
        self.assertEqual(clamp_score(-5), 0)
        self.assertEqual(clamp_score(101), 100)
        self.assertEqual(clamp_score(float("nan")), 0)
        self.assertEqual(clamp_score(49.5), 50)
        self.assertEqual(clamp_score(None), 0)


class ReportCleanupTests(unittest.TestCase):
    def test_clean_markdown(self):
        raw = "## Title\n\n\n\n**Bold** and *it*\n- item\n* item2"
        self.assertEqual(clean_markdown(raw), "Title\n\nBold and it\n• item\n• item2")

    def test_sections(self):
        text = "Intro\n✓ Dense inference\n• ✓ Tight compression\nSummary: Sharp mind.\nVerdict: Strong."
        self.assertEqual(extract_highlights(text), ["Dense inference", "Tight compression"])
        self.assertEqual(extract_summary(text), "Sharp mind.")
        self.assertEqual(extract_verdict(text), "Strong.")
        self.assertIsNone(extract_summary("no summary line"))


class ParseProfileTests(unittest.TestCase):
    def test_plain_report(self):
        raw = "**Intelligence Score: 88/100**\n✓ Dense inference\nSummary: Sharp.\nVerdict: Strong mind."
        parsed = parse_profile_response(raw, "openai", "An ordinary paragraph.")
        self.assertEqual(parsed.overall_score, 88)
        self.assertTrue(parsed.score_found)
        self.assertFalse(parsed.override_applied)
        self.assertEqual(parsed.highlights, ["Dense inference"])
        self.assertEqual(parsed.summary, "Sharp.")
        self.assertEqual(parsed.verdict, "Strong mind.")
        self.assertEqual(parsed.raw_report, raw)

    def test_missing_score_uses_fallback(self):
        parsed = parse_profile_response("A careful thinker.", "anthropic", "text")
        self.assertEqual(parsed.overall_score, 50)
        self.assertFalse(parsed.score_found)

    def test_pseudo_intellectual_text_forces_override(self):
        parsed = parse_profile_response("Intelligence Score: 97/100", "openai", PSEUDO_TEXT)
        self.assertEqual(parsed.overall_score, 35)
        self.assertTrue(parsed.override_applied)
        self.assertGreaterEqual(len(parsed.red_flags), 3)
        self.assertTrue(parsed.formatted_report.startswith("⚠️ PSEUDO-INTELLECTUAL PROSE DETECTED"))


if __name__ == "__main__":
    unittest.main()
